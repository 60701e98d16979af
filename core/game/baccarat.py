"""Punto Banco baccarat: fixed drawing rules, no decisions after the bet."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from random import Random

from core.cards import Card, Deck, create_deck
from core.hand import baccarat_value, is_natural
from core.results import (
    INVALID_BACCARAT_TABLE,
    PLAYER_NOT_FOUND,
    ActionResult,
    ErrorKind,
)
from core.tables import GameType, TableCatalog
from core.wallet import BalanceGateway, Currency
from core.game.events import EventEmitter, EventType

logger = logging.getLogger(__name__)


class BaccaratSide(Enum):
    """Bet categories, also the possible winners."""

    PLAYER = "player"
    BANKER = "banker"
    TIE = "tie"


# Total returned per unit staked on a winning bet
PAYOUT_MULTIPLIERS: dict[BaccaratSide, Decimal] = {
    BaccaratSide.PLAYER: Decimal("2"),  # 1:1
    BaccaratSide.BANKER: Decimal("1.95"),  # 1:1 less 5% commission
    BaccaratSide.TIE: Decimal("9"),  # 8:1
}

# Banker two-card total -> player third-card values on which the banker draws.
# Totals 0-2 always draw and 7 never does.
BANKER_DRAWS_ON: dict[int, frozenset[int]] = {
    3: frozenset({0, 1, 2, 3, 4, 5, 6, 7, 9}),
    4: frozenset({2, 3, 4, 5, 6, 7}),
    5: frozenset({4, 5, 6, 7}),
    6: frozenset({6, 7}),
}


def player_draws_third_card(player_value: int) -> bool:
    """Player draws on 0-5 and stands on 6-7."""
    return player_value <= 5


def banker_draws_third_card(banker_value: int, player_third_card: int | None) -> bool:
    """
    Decide the banker's draw.

    Args:
        banker_value: Banker's two-card total
        player_third_card: Baccarat value of the player's third card, or
            None if the player stood

    Returns:
        True if the banker takes a third card
    """
    if player_third_card is None:
        return banker_value <= 5
    if banker_value <= 2:
        return True
    if banker_value >= 7:
        return False
    return player_third_card in BANKER_DRAWS_ON[banker_value]


@dataclass(frozen=True)
class BaccaratHand:
    cards: tuple[Card, ...]
    value: int
    is_natural: bool

    @property
    def drew_third_card(self) -> bool:
        return len(self.cards) == 3


@dataclass(frozen=True)
class BaccaratOutcome:
    player_hand: BaccaratHand
    banker_hand: BaccaratHand
    winner: BaccaratSide
    bet_type: BaccaratSide
    amount: Decimal
    payout: Decimal


def deal_coup(deck: Deck) -> tuple[BaccaratHand, BaccaratHand, BaccaratSide]:
    """Deal one coup from ``deck`` and return player hand, banker hand and winner."""
    player = [deck.draw(), deck.draw()]
    banker = [deck.draw(), deck.draw()]
    player_natural = is_natural(player)
    banker_natural = is_natural(banker)

    if not (player_natural or banker_natural):
        player_third: int | None = None
        if player_draws_third_card(baccarat_value(player)):
            third = deck.draw()
            player.append(third)
            player_third = third.baccarat_value
        if banker_draws_third_card(baccarat_value(banker), player_third):
            banker.append(deck.draw())

    player_value = baccarat_value(player)
    banker_value = baccarat_value(banker)
    if player_value > banker_value:
        winner = BaccaratSide.PLAYER
    elif banker_value > player_value:
        winner = BaccaratSide.BANKER
    else:
        winner = BaccaratSide.TIE

    return (
        BaccaratHand(tuple(player), player_value, player_natural),
        BaccaratHand(tuple(banker), banker_value, banker_natural),
        winner,
    )


class BaccaratResolver:
    """Stateless baccarat rounds, each dealt from its own fresh deck."""

    def __init__(
        self,
        catalog: TableCatalog,
        wallet: BalanceGateway,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self.catalog = catalog
        self.wallet = wallet
        self._rng = rng or Random()
        self.events = events or EventEmitter()

    def new_deck(self) -> Deck:
        return create_deck(self._rng)

    def play(
        self,
        player_id: str,
        table_id: str,
        bet_type: BaccaratSide,
        amount: Decimal,
    ) -> ActionResult:
        """Deal a coup and pay the bet if it named the winner."""
        if self.catalog.require(table_id, GameType.BACCARAT) is None:
            self.events.emit_new(EventType.INVALID_ACTION, message=INVALID_BACCARAT_TABLE)
            return ActionResult.fail(ErrorKind.NOT_FOUND, INVALID_BACCARAT_TABLE)
        if self.wallet.get_player(player_id) is None:
            self.events.emit_new(EventType.INVALID_ACTION, message=PLAYER_NOT_FOUND)
            return ActionResult.fail(ErrorKind.NOT_FOUND, PLAYER_NOT_FOUND)

        player_hand, banker_hand, winner = deal_coup(self.new_deck())
        self.events.emit_new(
            EventType.BACCARAT_DEALT,
            table_id=table_id,
            player=[str(c) for c in player_hand.cards],
            banker=[str(c) for c in banker_hand.cards],
            winner=winner.value,
        )

        payout = amount * PAYOUT_MULTIPLIERS[bet_type] if bet_type == winner else Decimal("0")
        if payout > 0:
            self.wallet.add_balance(player_id, payout, Currency.GC)
            self.events.emit_new(
                EventType.PAYOUT_CREDITED,
                player_id=player_id,
                amount=str(payout),
                currency=Currency.GC.value,
            )

        logger.info(
            "Baccarat %s: %s %d-%d, %s bet %s on %s, payout %s",
            table_id,
            winner.value,
            player_hand.value,
            banker_hand.value,
            player_id,
            amount,
            bet_type.value,
            payout,
        )
        return ActionResult.ok(
            BaccaratOutcome(
                player_hand=player_hand,
                banker_hand=banker_hand,
                winner=winner,
                bet_type=bet_type,
                amount=amount,
                payout=payout,
            )
        )
