"""Single trial simulation.

A trial deals the opening hand, then draws one card at a time until the
hand holds the required number of combo pieces or the library runs out.
Running out is an ordinary outcome: the trial reports every draw it made.
"""

from combo_sim.models.card_models import Card, Deck
from combo_sim.models.simulation_models import OPENING_HAND_SIZE, TrialResult


def has_combo(hand: list[Card], required: int) -> bool:
    """Check whether a hand holds at least ``required`` combo pieces."""
    count = 0
    for card in hand:
        if card.is_combo:
            count += 1
            if count >= required:
                return True
    return False


def draw(hand: list[Card], library: list[Card]) -> Card:
    """Move the top card of the library into the hand."""
    card = library.pop()
    hand.append(card)
    return card


def run_trial(deck: Deck, required: int) -> TrialResult:
    """Simulate one game on a shuffled deck.

    Args:
        deck: Shuffled deck, top card first. Not modified.
        required: Combo pieces needed in hand to win

    Returns:
        TrialResult for the game
    """
    hand = list(deck[:OPENING_HAND_SIZE])
    # Reversed so the top of the library is the end of the list
    library = list(reversed(deck[OPENING_HAND_SIZE:]))

    opening_lands = sum(1 for card in hand if card.is_land)

    if has_combo(hand, required):
        return TrialResult(
            draws_to_win=0,
            opening_hand_win=True,
            opening_hand_lands=opening_lands,
        )

    # Combo count is tracked incrementally rather than recounting the hand
    combo_count = sum(1 for card in hand if card.is_combo)
    draws = 0
    while library:
        card = draw(hand, library)
        draws += 1
        if card.is_combo:
            combo_count += 1
            if combo_count >= required:
                return TrialResult(
                    draws_to_win=draws,
                    opening_hand_win=False,
                    opening_hand_lands=opening_lands,
                )

    return TrialResult(
        draws_to_win=draws,
        opening_hand_win=False,
        opening_hand_lands=opening_lands,
    )
