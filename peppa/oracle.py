"""Remote decision oracle with a bounded time budget and local fallback.

Each decision makes exactly one oracle call which races a timer:

  oracle settled first  -> validate the answer, use it if valid
  timer elapsed first   -> abandon the call (its result is never read)

Timeouts, transport errors, malformed replies and answers that do not match
the hand all end up in the same place: the designated local strategy.

An abandoned call keeps its worker until the transport returns; only the
HTTP timeout bounds that.  With every worker stuck, later calls queue up and
time out (they are cancelled before they start), and interpreter exit joins
the stuck workers.
"""
import json
import logging
import re
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Optional

import requests

from peppa.config import OracleConfig
from peppa.decision_log import DecisionEvent, DecisionObserver, NullObserver
from peppa.errors import (
    OracleError, OracleMalformedResponse, OracleTimeout,
    OracleTransportError, OracleValidationFailure,
)
from peppa.models import Card, GameState, Player
from peppa.players import PASS_COUNT, BasePlayer, CalculatingPlayer, SacrificePlayer

logger = logging.getLogger(__name__)

# Formatting the oracle tends to wrap a bare id in
_MOVE_REPLY_NOISE = re.compile(r"[`\"'\n\[\]]")

PASS_PROMPT = """You are an expert player of "Peppa Scivolosa" (Hearts).
Choose 3 cards to pass so as to avoid penalties (hearts and the queen of spades).
Hand: {hand}
Return only a JSON array of 3 ids: ["id1", "id2", "id3"]"""

MOVE_PROMPT = """Game: Hearts (Peppa).
Goal: avoid taking tricks with hearts or the queen of spades.
Lead: {lead}
Your hand: {hand}
Table: {trick}
Return ONLY the id of the card to play."""

# (task, prompt, payload) -> raw reply text
Transport = Callable[[str, str, object], str]


# ---------------------------------------------------------------------------
# Oracle views and reply parsing
# ---------------------------------------------------------------------------

def pass_view(hand: list[Card]) -> list[dict]:
    return [{"suit": c.suit.value, "rank": c.rank_name, "id": c.id} for c in hand]


def move_view(state: GameState, player: Player) -> dict:
    """What a fair player can see: own hand, the cards on the table, the lead suit."""
    return {
        "leadSuit": state.lead_suit.value if state.lead_suit else None,
        "hand": [c.to_dict() for c in player.hand],
        "trick": [{"card": {"suit": t.card.suit.value, "rank": t.card.rank_name,
                            "value": t.card.value}}
                  for t in state.current_trick],
    }


def parse_pass_reply(text: str, hand: list[Card]) -> list[str]:
    try:
        ids = json.loads((text or "").strip())
    except ValueError as e:
        raise OracleMalformedResponse(f"Pass reply is not JSON: {text!r}") from e
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise OracleMalformedResponse(f"Pass reply is not a list of ids: {text!r}")
    if len(ids) != PASS_COUNT:
        raise OracleValidationFailure(f"Expected {PASS_COUNT} ids, got {len(ids)}")
    if len(set(ids)) != len(ids):
        raise OracleValidationFailure(f"Duplicate ids in pass reply: {ids}")
    hand_ids = {c.id for c in hand}
    unknown = [i for i in ids if i not in hand_ids]
    if unknown:
        raise OracleValidationFailure(f"Ids not in hand: {unknown}")
    return ids


def parse_move_reply(text: str, player: Player) -> Card:
    card_id = _MOVE_REPLY_NOISE.sub("", text or "").strip()
    if not card_id:
        raise OracleMalformedResponse("Empty move reply")
    card = player.find_card(card_id)
    if card is None:
        raise OracleValidationFailure(f"Card {card_id!r} not in hand")
    return card


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class HttpOracleTransport:
    """Posts one decision request to the oracle endpoint and returns its text."""

    def __init__(self, config: OracleConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def __call__(self, task: str, prompt: str, payload) -> str:
        headers = {}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        body = {
            "model": self.config.model,
            "task": task,
            "prompt": prompt,
            "payload": payload,
            "temperature": self.config.temperature,
        }
        try:
            r = self.session.post(self.config.url, json=body, headers=headers,
                                  timeout=self.config.timeout_seconds)
            r.raise_for_status()
        except requests.RequestException as e:
            raise OracleTransportError(str(e)) from e

        try:
            data = r.json()
        except ValueError as e:
            raise OracleMalformedResponse("Oracle reply is not JSON") from e
        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise OracleMalformedResponse("Oracle reply has no text field")
        return text


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class RemoteDecisionClient:
    """Ask the oracle first, fall back to a local strategy on any failure."""

    def __init__(self, config: OracleConfig,
                 fallback: Optional[BasePlayer] = None,
                 pass_fallback: Optional[BasePlayer] = None,
                 transport: Optional[Transport] = None,
                 observer: Optional[DecisionObserver] = None):
        self.config = config
        self.fallback = fallback or CalculatingPlayer()
        self.pass_fallback = pass_fallback or SacrificePlayer()
        self.observer = observer or NullObserver()
        self._transport = transport or HttpOracleTransport(config)
        self._executor = ThreadPoolExecutor(max_workers=config.workers,
                                            thread_name_prefix="oracle")

    def close(self):
        # Calls abandoned after a timeout are not waited for
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def select_pass_cards(self, hand: list[Card]) -> list[str]:
        start = time.monotonic()
        view = pass_view(hand)
        try:
            text = self._ask("pass", PASS_PROMPT.format(hand=json.dumps(view)), view)
            ids = parse_pass_reply(text, hand)
        except OracleError as e:
            self._report_fallback("pass", None, e, start, self.pass_fallback)
            return self.pass_fallback.select_pass_cards(hand)

        self._report_accepted("pass", None, ids, start)
        return ids

    def select_move(self, state: GameState, player_id) -> Card:
        """Raises BotNotFoundError before any oracle call if the player is unknown."""
        player = state.get_player(player_id)
        start = time.monotonic()
        view = move_view(state, player)
        prompt = MOVE_PROMPT.format(lead=view["leadSuit"] or "None",
                                    hand=json.dumps(view["hand"]),
                                    trick=json.dumps(view["trick"]))
        try:
            text = self._ask("move", prompt, view)
            card = parse_move_reply(text, player)
        except OracleError as e:
            self._report_fallback("move", player_id, e, start, self.fallback)
            return self.fallback.select_move(state, player_id)

        self._report_accepted("move", player_id, [card.id], start)
        return card

    def _ask(self, task: str, prompt: str, payload) -> str:
        future = self._executor.submit(self._transport, task, prompt, payload)
        done, _ = wait([future], timeout=self.config.timeout_seconds,
                       return_when=FIRST_COMPLETED)
        if future not in done:
            future.cancel()
            raise OracleTimeout(f"No answer within {self.config.timeout_ms}ms")
        try:
            return future.result()
        except OracleError:
            raise
        except Exception as e:
            raise OracleTransportError(f"{type(e).__name__}: {e}") from e

    def _report_fallback(self, task, player_id, error, start, strategy):
        elapsed = int((time.monotonic() - start) * 1000)
        logger.warning("Oracle %s failed after %dms (%s: %s), falling back to %s",
                       task, elapsed, type(error).__name__, error, strategy.name)
        self.observer.notify(DecisionEvent(
            source="oracle", phase="fallback", player_id=player_id,
            rationale=type(error).__name__,
            details={"task": task, "reason": str(error), "elapsed_ms": elapsed,
                     "fallback": strategy.name},
        ))

    def _report_accepted(self, task, player_id, chosen, start):
        elapsed = int((time.monotonic() - start) * 1000)
        logger.info("Oracle %s answered in %dms: %s", task, elapsed, chosen)
        self.observer.notify(DecisionEvent(
            source="oracle", phase="oracle", player_id=player_id, chosen=chosen,
            rationale=task, details={"elapsed_ms": elapsed},
        ))
