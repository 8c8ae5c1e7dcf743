import logging
from numbers import Real
from typing import Callable, Iterable, List, Optional

from .clock import Clock
from .events import BoutEvent, EventLog
from .fencer import Card, FencerState, Side

logger = logging.getLogger(__name__)

_TOUCH_MESSAGES = {Side.LEFT: 'Left scores', Side.RIGHT: 'Right scores'}
DOUBLE_TOUCH_MESSAGE = 'Double-touch'


class BoutConfigError(ValueError):
    """Raised when a bout is constructed with unusable settings."""


class BoutController:
    """Live state of one bout and the actions a referee can take on it.

    Owns both fencers, the event log and the clock. Every mutation is pushed
    to the registered listeners; the clock reports back through
    ``on_tick``/``on_finish``. Callers must serialize actions.
    """

    def __init__(self, default_time: float, listeners: Iterable = (),
                 interval: float = 0.1,
                 spawn: Optional[Callable] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        if not _positive(default_time):
            raise BoutConfigError(f"default time must be a positive number of seconds, got {default_time!r}")
        if not _positive(interval):
            raise BoutConfigError(f"clock interval must be a positive number of seconds, got {interval!r}")

        self.default_time = float(default_time)
        self.period = 1
        self.events = EventLog()
        self._fencers = {Side.LEFT: FencerState(), Side.RIGHT: FencerState()}
        self._listeners: List = list(listeners)
        self.clock = Clock(
            self.default_time,
            interval=float(interval),
            on_tick=self.on_tick,
            on_finish=self.on_finish,
            spawn=spawn,
            sleep=sleep,
        )

        self._notify('set_current_time', self.default_time)
        self._notify('set_left_score', 0)
        self._notify('set_right_score', 0)

    # ---- listeners ----
    def add_listener(self, listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, method: str, *args) -> None:
        for listener in list(self._listeners):
            getattr(listener, method)(*args)

    def _notify_score(self, side: Side) -> None:
        self._notify(f"set_{side.value}_score", self._fencers[side].score)

    def _notify_card(self, side: Side) -> None:
        self._notify(f"set_{side.value}_card", self._fencers[side].card)

    # ---- read access ----
    def score(self, side: Side) -> int:
        return self._fencers[side].score

    def card_of(self, side: Side) -> Card:
        return self._fencers[side].card

    @property
    def left_score(self) -> int:
        return self.score(Side.LEFT)

    @property
    def right_score(self) -> int:
        return self.score(Side.RIGHT)

    @property
    def left_card(self) -> Card:
        return self.card_of(Side.LEFT)

    @property
    def right_card(self) -> Card:
        return self.card_of(Side.RIGHT)

    @property
    def current_time(self) -> float:
        return self.clock.current_time

    @property
    def running(self) -> bool:
        return self.clock.running

    def snapshot(self):
        return {
            'left': self._fencers[Side.LEFT].to_dict(),
            'right': self._fencers[Side.RIGHT].to_dict(),
            'period': self.period,
            'current_time': self.current_time,
            'default_time': self.default_time,
            'running': self.running,
            'event_count': len(self.events),
        }

    # ---- timer ----
    def start(self) -> None:
        self.clock.start()

    def halt(self) -> None:
        self.clock.stop()

    def toggle_timer(self) -> None:
        self.clock.toggle()

    # ---- scoring ----
    def touch(self, side: Side) -> None:
        score = self._fencers[side].apply_touch(+1)
        self._notify_score(side)
        self._record(_TOUCH_MESSAGES[side])
        logger.info(f"[touch] side={side.value} score={score}")

    def reverse_touch(self, side: Side) -> None:
        score = self._fencers[side].apply_touch(-1)
        self._notify_score(side)
        logger.info(f"[reverse] side={side.value} score={score}")

    def touch_double(self) -> None:
        self._fencers[Side.LEFT].apply_touch(+1)
        self._fencers[Side.RIGHT].apply_touch(+1)
        self._notify_score(Side.LEFT)
        self._notify_score(Side.RIGHT)
        self._record(DOUBLE_TOUCH_MESSAGE)
        logger.info(f"[double] left={self.left_score} right={self.right_score}")

    def card(self, side: Side, card: Card) -> Card:
        outcome = self._fencers[side].apply_card(card)
        opponent = side.opponent
        if outcome.award_opponent_point:
            self._fencers[opponent].apply_touch(+1)
        self._notify_card(side)
        self._notify_score(opponent)
        logger.info(
            f"[card] side={side.value} card={outcome.card.value} "
            f"awarded={outcome.award_opponent_point} {opponent.value}_score={self.score(opponent)}"
        )
        return outcome.card

    def touch_left(self) -> None:
        self.touch(Side.LEFT)

    def touch_right(self) -> None:
        self.touch(Side.RIGHT)

    def reverse_touch_left(self) -> None:
        self.reverse_touch(Side.LEFT)

    def reverse_touch_right(self) -> None:
        self.reverse_touch(Side.RIGHT)

    def card_left(self, card: Card) -> Card:
        return self.card(Side.LEFT, card)

    def card_right(self, card: Card) -> Card:
        return self.card(Side.RIGHT, card)

    # ---- bout management ----
    def reset_to_default(self) -> None:
        """Fresh fencers and a full clock. The event log is kept."""
        self._fencers = {Side.LEFT: FencerState(), Side.RIGHT: FencerState()}
        self.clock.current_time = self.default_time

        self._notify_score(Side.LEFT)
        self._notify_score(Side.RIGHT)
        self._notify_card(Side.LEFT)
        self._notify_card(Side.RIGHT)
        self._notify('set_current_time', self.default_time)
        logger.info(f"[reset] default_time={self.default_time}")

    def advance_period(self) -> int:
        self.period += 1
        return self.period

    def _record(self, message: str) -> None:
        self.events.record(BoutEvent(
            timestamp=self.clock.current_time,
            left_score=self.left_score,
            right_score=self.right_score,
            message=message,
        ))

    # ---- clock callbacks ----
    def on_tick(self, remaining: float) -> None:
        self._notify('set_current_time', remaining)

    def on_finish(self) -> None:
        self._notify('set_current_time', 0.0)
        self._notify('stop_timer')


def _positive(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value > 0
