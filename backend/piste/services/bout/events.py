from collections.abc import Sequence
from dataclasses import dataclass, asdict
from typing import List


@dataclass(frozen=True)
class BoutEvent:
    timestamp: float  # seconds remaining on the clock
    left_score: int
    right_score: int
    message: str

    def to_dict(self):
        return asdict(self)


class _EventView(Sequence):
    """Read-only window onto a log's events; reflects later appends."""

    def __init__(self, events: List[BoutEvent]):
        self._events = events

    def __getitem__(self, index):
        return self._events[index]

    def __len__(self):
        return len(self._events)


class EventLog:
    """Append-only, chronologically ordered record of scoring events."""

    def __init__(self):
        self._events: List[BoutEvent] = []

    def record(self, event: BoutEvent) -> None:
        self._events.append(event)

    def as_sequence(self) -> Sequence:
        return _EventView(self._events)

    def to_list(self):
        return [e.to_dict() for e in self._events]

    def __iter__(self):
        return iter(self._events)

    def __len__(self):
        return len(self._events)

    def __getitem__(self, index):
        return self._events[index]
