"""Blackjack table engine: bet, hit, stand and double against a shared table round."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from core.cards import Card
from core.hand import Hand, HandOutcome, blackjack_payout, blackjack_score, evaluate_hands
from core.results import (
    INSUFFICIENT_FUNDS_TO_DOUBLE,
    INVALID_ACTION,
    INVALID_BET_AMOUNT,
    INVALID_BLACKJACK_TABLE,
    NO_ACTIVE_HAND,
    PLAYER_NOT_FOUND,
    ActionResult,
    ErrorKind,
)
from core.tables import GameType, Table, TableCatalog
from core.wallet import BalanceGateway, Currency
from core.game.events import EventEmitter, EventType
from core.game.state import BlackjackRound, GameStateStore, RoundStage

logger = logging.getLogger(__name__)

DEALER_STANDS_ON = 17


class BlackjackMove(Enum):
    """Player actions accepted at a blackjack table."""

    BET = "bet"
    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"


@dataclass(frozen=True)
class BetOutcome:
    player_hand: tuple[Card, ...]
    dealer_card: Card
    player_score: int


@dataclass(frozen=True)
class HitOutcome:
    hand: tuple[Card, ...]
    score: int

    @property
    def busted(self) -> bool:
        return self.score > 21


@dataclass(frozen=True)
class SettlementOutcome:
    result: HandOutcome
    player_score: int
    dealer_score: int
    dealer_hand: tuple[Card, ...]
    bet: Decimal
    payout: Decimal


class BlackjackEngine:
    """
    Runs blackjack rounds for every blackjack table.

    Rounds live in the ``GameStateStore``; a round is created on the first
    bet at a table and replaced by a fresh one on the first bet after it
    resolves. A bet placed while a round is still being played joins that
    round, sharing its deck and re-dealing the dealer's hand.

    Busting on a hit does not settle the hand; the player must still stand.
    """

    def __init__(
        self,
        catalog: TableCatalog,
        wallet: BalanceGateway,
        store: GameStateStore,
        events: EventEmitter | None = None,
    ) -> None:
        self.catalog = catalog
        self.wallet = wallet
        self.store = store
        self.events = events or EventEmitter()

    def play(
        self,
        player_id: str,
        table_id: str,
        action: BlackjackMove | str,
        bet: Decimal | None = None,
    ) -> ActionResult:
        """
        Apply one player action to a table.

        Args:
            player_id: Acting player
            table_id: Blackjack table id
            action: One of bet/hit/stand/double
            bet: Stake in gold coins, required for ``bet``

        Returns:
            ActionResult carrying a BetOutcome, HitOutcome or SettlementOutcome
        """
        table = self.catalog.require(table_id, GameType.BLACKJACK)
        if table is None:
            return self._reject(ErrorKind.NOT_FOUND, INVALID_BLACKJACK_TABLE, table_id=table_id)

        if self.wallet.get_player(player_id) is None:
            return self._reject(ErrorKind.NOT_FOUND, PLAYER_NOT_FOUND, player_id=player_id)

        try:
            move = BlackjackMove(action)
        except ValueError:
            return self._reject(ErrorKind.UNRECOGNIZED, INVALID_ACTION, action=str(action))

        if move == BlackjackMove.BET:
            return self.place_bet(player_id, table, bet)

        actions = {
            BlackjackMove.HIT: self.hit,
            BlackjackMove.STAND: self.stand,
            BlackjackMove.DOUBLE: self.double_down,
        }
        return actions[move](player_id, table)

    def place_bet(self, player_id: str, table: Table, amount: Decimal | None) -> ActionResult:
        """Record a bet and deal two cards each to the player and the dealer."""
        if amount is None or not table.accepts(amount, Currency.GC):
            return self._reject(
                ErrorKind.VALIDATION,
                INVALID_BET_AMOUNT,
                amount=None if amount is None else str(amount),
            )

        game_round = self.store.get_or_create(table.table_id)
        if game_round.stage == RoundStage.RESOLVED:
            game_round.new_round()
        if game_round.stage == RoundStage.BETTING:
            logger.info("Round %d started at %s", game_round.round_number, table.table_id)
            self.events.emit_new(
                EventType.ROUND_STARTED,
                table_id=table.table_id,
                round_number=game_round.round_number,
            )

        hand = Hand(bet=amount)
        self._deal(game_round, hand.cards, player_id)
        self._deal(game_round, hand.cards, player_id)
        dealer_hand: list[Card] = []
        self._deal(game_round, dealer_hand, "dealer")
        self._deal(game_round, dealer_hand, "dealer", face_up=False)

        game_round.hands[player_id] = hand
        game_round.dealer_hand = dealer_hand
        game_round.deal()

        self.events.emit_new(
            EventType.BET_PLACED,
            table_id=table.table_id,
            player_id=player_id,
            amount=str(amount),
        )
        return ActionResult.ok(
            BetOutcome(
                player_hand=tuple(hand.cards),
                dealer_card=dealer_hand[0],
                player_score=hand.value,
            )
        )

    def hit(self, player_id: str, table: Table) -> ActionResult:
        """Draw one card; a bust is reported but not settled."""
        game_round = self.store.get(table.table_id)
        hand = game_round.hands.get(player_id) if game_round else None
        if game_round is None or hand is None:
            return self._reject(ErrorKind.VALIDATION, NO_ACTIVE_HAND, player_id=player_id)

        self._deal(game_round, hand.cards, player_id)
        self.events.emit_new(EventType.PLAYER_HIT, player_id=player_id, hand_value=hand.value)
        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, player_id=player_id, hand_value=hand.value)

        return ActionResult.ok(HitOutcome(hand=tuple(hand.cards), score=hand.value))

    def stand(self, player_id: str, table: Table) -> ActionResult:
        """Stand and settle the hand against the dealer."""
        game_round = self.store.get(table.table_id)
        hand = game_round.hands.get(player_id) if game_round else None
        if game_round is None or hand is None:
            return self._reject(ErrorKind.VALIDATION, NO_ACTIVE_HAND, player_id=player_id)

        self.events.emit_new(EventType.PLAYER_STAND, player_id=player_id, hand_value=hand.value)
        return ActionResult.ok(self._settle(game_round, player_id))

    def double_down(self, player_id: str, table: Table) -> ActionResult:
        """
        Double the bet, take exactly one card and settle.

        Only the player's gold-coin balance limits the double; the table's
        max bet does not.
        """
        game_round = self.store.get(table.table_id)
        hand = game_round.hands.get(player_id) if game_round else None
        if game_round is None or hand is None:
            return self._reject(ErrorKind.VALIDATION, NO_ACTIVE_HAND, player_id=player_id)

        if not self.wallet.can_afford(player_id, hand.bet, Currency.GC):
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                player_id=player_id,
                required=str(hand.bet),
            )
            return self._reject(ErrorKind.VALIDATION, INSUFFICIENT_FUNDS_TO_DOUBLE, player_id=player_id)

        hand.bet *= 2
        hand.is_doubled = True
        self._deal(game_round, hand.cards, player_id)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            player_id=player_id,
            hand_value=hand.value,
            new_bet=str(hand.bet),
        )
        return ActionResult.ok(self._settle(game_round, player_id))

    def _deal(
        self,
        game_round: BlackjackRound,
        cards: list[Card],
        recipient: str,
        face_up: bool = True,
    ) -> Card:
        """Draw the next card into ``cards``, replenishing an exhausted deck."""
        if not game_round.deck:
            game_round.replenish()
            logger.warning("Deck exhausted at %s; dealing from a fresh deck", game_round.table_id)
            self.events.emit_new(EventType.DECK_REPLENISHED, table_id=game_round.table_id)

        card = game_round.deck.draw()
        cards.append(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            table_id=game_round.table_id,
            card=str(card) if face_up else "??",
            hand=recipient,
        )
        return card

    def _play_dealer(self, game_round: BlackjackRound) -> int:
        """Dealer draws to 17; soft and hard totals are treated alike."""
        while blackjack_score(game_round.dealer_hand) < DEALER_STANDS_ON:
            self._deal(game_round, game_round.dealer_hand, "dealer")
            self.events.emit_new(
                EventType.DEALER_HITS,
                hand_value=blackjack_score(game_round.dealer_hand),
            )

        dealer_score = blackjack_score(game_round.dealer_hand)
        if dealer_score > 21:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_score)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_score)
        return dealer_score

    def _settle(self, game_round: BlackjackRound, player_id: str) -> SettlementOutcome:
        """Play out the dealer, pay the hand and close the round once every hand is settled."""
        dealer_score = self._play_dealer(game_round)
        hand = game_round.hands.pop(player_id)

        outcome = evaluate_hands(hand.value, dealer_score)
        payout = blackjack_payout(outcome, hand.bet)
        if payout > 0:
            self.wallet.add_balance(player_id, payout, Currency.GC)
            self.events.emit_new(
                EventType.PAYOUT_CREDITED,
                player_id=player_id,
                amount=str(payout),
                currency=Currency.GC.value,
            )

        result_events = {
            HandOutcome.WIN: EventType.PLAYER_WINS,
            HandOutcome.PUSH: EventType.PUSH,
            HandOutcome.LOSE: EventType.PLAYER_LOSES,
            HandOutcome.BUST: EventType.PLAYER_LOSES,
        }
        self.events.emit_new(
            result_events[outcome],
            player_id=player_id,
            player_score=hand.value,
            dealer_score=dealer_score,
            payout=str(payout),
        )
        logger.info(
            "Settled %s at %s: %s (%d vs %d), payout %s",
            player_id,
            game_round.table_id,
            outcome.value,
            hand.value,
            dealer_score,
            payout,
        )

        if not game_round.hands:
            game_round.finish()
            self.events.emit_new(
                EventType.ROUND_ENDED,
                table_id=game_round.table_id,
                round_number=game_round.round_number,
            )

        return SettlementOutcome(
            result=outcome,
            player_score=hand.value,
            dealer_score=dealer_score,
            dealer_hand=tuple(game_round.dealer_hand),
            bet=hand.bet,
            payout=payout,
        )

    def _reject(self, kind: ErrorKind, message: str, **data) -> ActionResult:
        logger.info("Rejected blackjack action: %s %s", message, data)
        self.events.emit_new(EventType.INVALID_ACTION, message=message, **data)
        return ActionResult.fail(kind, message)
