import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Card(str, Enum):
    """Penalty cards, in increasing severity."""
    NONE = 'none'
    YELLOW = 'yellow'
    RED = 'red'
    BLACK = 'black'

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {Card.NONE: 0, Card.YELLOW: 1, Card.RED: 2, Card.BLACK: 3}


class Side(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def opponent(self) -> 'Side':
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class CardOutcome:
    card: Card
    award_opponent_point: bool


class FencerState:
    """Score and current card for one fencer.

    The opponent is never touched from here: when a card assignment awards
    a point, the outcome says so and the controller credits the other side.
    """

    def __init__(self):
        self._score = 0
        self._card = Card.NONE

    @property
    def score(self) -> int:
        return self._score

    @property
    def card(self) -> Card:
        return self._card

    def apply_touch(self, delta: int) -> int:
        """Adjust the score by ``delta``, clamping at zero."""
        self._score = max(0, self._score + delta)
        return self._score

    def apply_card(self, new_card: Card) -> CardOutcome:
        """Assign a card and report whether the opponent earns a point.

        - A second YELLOW becomes RED.
        - Any RED (direct or escalated) awards the opponent a point.
        - BLACK never awards a point.
        - Once RED only BLACK is accepted; BLACK is final. Other
          assignments leave the card unchanged and award nothing.
        """
        if not isinstance(new_card, Card):
            raise TypeError(f"expected Card, got {type(new_card).__name__}")

        current = self._card
        if current in (Card.RED, Card.BLACK) and new_card.severity <= current.severity:
            logger.warning(f"[card-ignored] current={current.value} requested={new_card.value}")
            return CardOutcome(card=current, award_opponent_point=False)

        if new_card is Card.YELLOW and current is Card.YELLOW:
            self._card = Card.RED
        else:
            self._card = new_card
        return CardOutcome(card=self._card, award_opponent_point=self._card is Card.RED)

    def to_dict(self):
        return {
            'score': self._score,
            'card': self._card.value,
        }
