"""Card value types for the combo draw simulator.

A deck is modeled as nothing more than lands and non-lands, with some
non-lands flagged as combo pieces. Cards are immutable, so a deck can
hold the same instance many times.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CardKind(str, Enum):
    """The two card kinds a simulated deck contains."""

    LAND = "land"
    NON_LAND = "non-land"


@dataclass(frozen=True)
class Card:
    """A single abstract card.

    Attributes:
        kind: Land or non-land.
        is_combo: True if the card counts toward the win condition.
            Only non-lands can be combo pieces.
    """

    kind: CardKind
    is_combo: bool = False

    def __post_init__(self) -> None:
        if self.kind is CardKind.LAND and self.is_combo:
            raise ValueError("A land cannot be a combo piece")

    @property
    def is_land(self) -> bool:
        return self.kind is CardKind.LAND


LAND = Card(kind=CardKind.LAND)
NON_LAND = Card(kind=CardKind.NON_LAND)
COMBO_PIECE = Card(kind=CardKind.NON_LAND, is_combo=True)

# A deck is an ordered list of cards, top of the deck first
Deck = list[Card]
