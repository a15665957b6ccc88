"""Bot decision service: lets a game host ask the bots for passes and moves.

  GET  /api/health        → {status}
  GET  /api/strategies    → {strategies, remote}
  POST /api/pass          → {card_ids}
  POST /api/move          → {card}
  POST /api/legal-cards   → {cards}

Strategy "remote" is only offered when the app is built with a
RemoteDecisionClient (see __main__ below).
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from peppa.config import OracleConfig
from peppa.errors import BotNotFoundError, GameError
from peppa.models import GameState, hand_from_dicts
from peppa.oracle import RemoteDecisionClient
from peppa.players import PLAYERS, make_player
from peppa.rules import legal_cards_for

REMOTE = "remote"


def create_app(remote_client: Optional[RemoteDecisionClient] = None) -> Flask:
    app = Flask(__name__)
    CORS(app)

    def _strategy(name):
        if name == REMOTE and remote_client is not None:
            return remote_client
        if name not in PLAYERS:
            return None
        return make_player(name)

    def _bad_request(msg):
        return jsonify({"error": msg}), 400

    def _flag(data, key):
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise ValueError(f"{key} must be true, false or null")
        return value

    @app.route('/api/health')
    def ep_health():
        return jsonify({"status": "ok"})

    @app.route('/api/strategies')
    def ep_strategies():
        names = list(PLAYERS)
        if remote_client is not None:
            names.append(REMOTE)
        return jsonify({"strategies": names, "remote": remote_client is not None})

    @app.route('/api/pass', methods=['POST'])
    def ep_pass():
        data = request.get_json(silent=True) or {}
        bot = _strategy(data.get("strategy"))
        if bot is None:
            return _bad_request(f"Unknown strategy: {data.get('strategy')}")
        try:
            hand = hand_from_dicts(data.get("hand", []))
            moon_shot = _flag(data, "moon_shot")
        except (ValueError, TypeError, AttributeError) as e:
            return _bad_request(str(e))
        if not hand:
            return _bad_request("Hand is empty")

        if bot is remote_client:
            ids = bot.select_pass_cards(hand)
        else:
            ids = bot.select_pass_cards(hand, moon_shot=moon_shot)
        return jsonify({"card_ids": ids})

    @app.route('/api/move', methods=['POST'])
    def ep_move():
        data = request.get_json(silent=True) or {}
        bot = _strategy(data.get("strategy"))
        if bot is None:
            return _bad_request(f"Unknown strategy: {data.get('strategy')}")
        try:
            moon_shot = _flag(data, "moon_shot")
        except ValueError as e:
            return _bad_request(str(e))
        try:
            state = GameState.from_dict(data.get("state") or {})
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            return _bad_request(f"Invalid state: {e}")

        try:
            if bot is remote_client:
                card = bot.select_move(state, data.get("player_id"))
            else:
                card = bot.select_move(state, data.get("player_id"),
                                       moon_shot=moon_shot)
        except BotNotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except GameError as e:
            return _bad_request(str(e))
        return jsonify({"card": card.to_dict()})

    @app.route('/api/legal-cards', methods=['POST'])
    def ep_legal_cards():
        data = request.get_json(silent=True) or {}
        try:
            state = GameState.from_dict(data.get("state") or {})
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            return _bad_request(f"Invalid state: {e}")

        try:
            legal = legal_cards_for(state, data.get("player_id"),
                                    bool(data.get("enforce_lead_hearts_restriction", False)))
        except BotNotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except GameError as e:
            return _bad_request(str(e))
        return jsonify({"cards": [c.id for c in legal]})

    return app


app = create_app()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    client = RemoteDecisionClient(OracleConfig.from_env()) if os.environ.get('ORACLE_URL') else None
    port = int(os.environ.get('BOT_SERVICE_PORT', '3003'))
    debug = os.environ.get('FLASK_DEBUG', '1') == '1'
    create_app(client).run(host='0.0.0.0', port=port, debug=debug)
