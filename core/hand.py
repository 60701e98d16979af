"""Hand scoring for blackjack and baccarat."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, Iterator, Sequence

from core.cards import Card


def blackjack_score(cards: Iterable[Card]) -> int:
    """
    Return the best blackjack total for ``cards``.

    Aces count 11 and are downgraded to 1 one at a time while the total is
    over 21. A result above 21 means the hand has busted.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
            total += 11
        else:
            total += card.value

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if an ace is still being counted as 11."""
    if not any(card.is_ace for card in cards):
        return False
    total_hard = sum(1 if card.is_ace else card.value for card in cards)
    return total_hard + 10 <= 21


def baccarat_value(cards: Iterable[Card]) -> int:
    """Return the baccarat hand value: sum of baccarat card values modulo 10."""
    return sum(card.baccarat_value for card in cards) % 10


def is_natural(cards: Sequence[Card]) -> bool:
    """Check for a two-card baccarat total of 8 or 9."""
    return len(cards) == 2 and baccarat_value(cards) >= 8


@dataclass
class Hand:
    """A player's blackjack hand and the stake riding on it."""

    cards: list[Card] = field(default_factory=list)
    bet: Decimal = Decimal("0")
    is_doubled: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        return blackjack_score(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_busted(self) -> bool:
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST)"
        if self.is_soft:
            return f"{cards_str} (soft {self.value})"
        return f"{cards_str} ({self.value})"


class HandOutcome(Enum):
    """Result of a settled blackjack hand."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BUST = "bust"


def evaluate_hands(player_score: int, dealer_score: int) -> HandOutcome:
    """
    Compare a player total against the dealer's final total.

    A busted player loses whatever the dealer holds; a busted dealer loses to
    any standing player.
    """
    if player_score > 21:
        return HandOutcome.BUST
    if dealer_score > 21:
        return HandOutcome.WIN
    if player_score > dealer_score:
        return HandOutcome.WIN
    if player_score < dealer_score:
        return HandOutcome.LOSE
    return HandOutcome.PUSH


def blackjack_payout(outcome: HandOutcome, bet: Decimal) -> Decimal:
    """Return the amount credited back for a settled hand (stake included)."""
    if outcome == HandOutcome.WIN:
        return bet * 2
    if outcome == HandOutcome.PUSH:
        return bet
    return Decimal("0")
