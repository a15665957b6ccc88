"""Decision observers: a structured trace of what the bots considered and chose.

Observers only watch: a decision is identical whichever observer is attached.

File format (FileObserver), one line per event in logs/decisions_<session>.log
------------------------------------------------------------------------------
  <source> <phase> p=<player_id> <rationale> -> <chosen ids> [id:score ...]
"""
import os
from dataclasses import dataclass, field
from typing import Optional

LOGS_DIR = os.path.join(os.path.dirname(__file__), '..', 'logs')


@dataclass
class DecisionEvent:
    source: str
    phase: str                       # "pass", "move", "oracle" or "fallback"
    player_id: Optional[int] = None
    chosen: list[str] = field(default_factory=list)
    rationale: str = ""
    scores: dict[str, int] = field(default_factory=dict)
    details: dict = field(default_factory=dict)

    def format(self) -> str:
        who = f" p={self.player_id}" if self.player_id is not None else ""
        line = f"{self.source} {self.phase}{who} {self.rationale} -> {', '.join(self.chosen) or '-'}"
        if self.scores:
            line += " [" + " ".join(f"{cid}:{s}" for cid, s in self.scores.items()) + "]"
        if self.details:
            line += " " + " ".join(f"{k}={v}" for k, v in self.details.items())
        return line


class DecisionObserver:
    """Base observer; receives every decision event."""

    def notify(self, event: DecisionEvent):
        raise NotImplementedError


class NullObserver(DecisionObserver):
    def notify(self, event):
        pass


class RecordingObserver(DecisionObserver):
    """Keeps events in memory (tests, replays)."""

    def __init__(self):
        self.events: list[DecisionEvent] = []

    def notify(self, event):
        self.events.append(event)

    def by_phase(self, phase: str) -> list[DecisionEvent]:
        return [e for e in self.events if e.phase == phase]


class ConsoleObserver(DecisionObserver):
    def notify(self, event):
        print(f"[{event.source}] {event.format()}")


class FileObserver(DecisionObserver):
    def __init__(self, session_id: str, logs_dir: str = LOGS_DIR):
        os.makedirs(logs_dir, exist_ok=True)
        self._path = os.path.join(logs_dir, f'decisions_{session_id}.log')

    @property
    def path(self) -> str:
        return self._path

    def notify(self, event):
        with open(self._path, 'a', encoding='utf-8') as f:
            f.write(event.format() + '\n')
