"""Per-table blackjack round state and the store that owns it."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from random import Random

from transitions import Machine

from core.cards import Card, Deck, create_deck
from core.hand import Hand

logger = logging.getLogger(__name__)


class RoundStage(Enum):
    """
    Blackjack round stages.

    Flow: BETTING -> PLAYING -> RESOLVED -> (new round) BETTING
    """

    BETTING = "betting"
    PLAYING = "playing"
    RESOLVED = "resolved"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandSnapshot:
    player_id: str
    cards: tuple[Card, ...]
    bet: Decimal
    score: int
    is_soft: bool
    is_busted: bool
    is_doubled: bool


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of a table's round, safe to hand to callers."""

    table_id: str
    round_number: int
    stage: RoundStage
    cards_remaining: int
    dealer_cards: tuple[Card, ...]
    hands: tuple[HandSnapshot, ...]

    @property
    def dealer_upcard(self) -> Card | None:
        return self.dealer_cards[0] if self.dealer_cards else None


class BlackjackRound:
    """
    Mutable state of one table's current blackjack round.

    Only the blackjack engine mutates a round; everyone else reads
    ``snapshot()``.
    """

    STATES = [s.value for s in RoundStage]

    TRANSITIONS = [
        {"trigger": "deal", "source": ["betting", "playing"], "dest": "playing"},
        {"trigger": "finish", "source": "playing", "dest": "resolved"},
        {"trigger": "new_round", "source": "resolved", "dest": "betting", "after": "_reset"},
    ]

    def __init__(self, table_id: str, rng: Random | None = None) -> None:
        self.table_id = table_id
        self._rng = rng or Random()
        self.deck: Deck = create_deck(self._rng)
        self.dealer_hand: list[Card] = []
        self.hands: dict[str, Hand] = {}
        self.round_number = 1

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def stage(self) -> RoundStage:
        return RoundStage(self._machine_state)  # type: ignore[attr-defined]

    @property
    def bets(self) -> dict[str, Decimal]:
        """Current bet per player with an active hand."""
        return {player_id: hand.bet for player_id, hand in self.hands.items()}

    def _reset(self) -> None:
        """Start over with a fresh deck and no hands."""
        self.deck = create_deck(self._rng)
        self.dealer_hand = []
        self.hands = {}
        self.round_number += 1
        logger.debug("Table %s reset for round %d", self.table_id, self.round_number)

    def replenish(self) -> None:
        """Replace an exhausted deck with a fresh shuffled one."""
        self.deck = create_deck(self._rng)

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            table_id=self.table_id,
            round_number=self.round_number,
            stage=self.stage,
            cards_remaining=len(self.deck),
            dealer_cards=tuple(self.dealer_hand),
            hands=tuple(
                HandSnapshot(
                    player_id=player_id,
                    cards=tuple(hand.cards),
                    bet=hand.bet,
                    score=hand.value,
                    is_soft=hand.is_soft,
                    is_busted=hand.is_busted,
                    is_doubled=hand.is_doubled,
                )
                for player_id, hand in self.hands.items()
            ),
        )


class GameStateStore:
    """Blackjack rounds keyed strictly by table id. Not thread-safe."""

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._rounds: dict[str, BlackjackRound] = {}

    def get(self, table_id: str) -> BlackjackRound | None:
        return self._rounds.get(table_id)

    def get_or_create(self, table_id: str) -> BlackjackRound:
        """Return the table's round, creating a fresh one on first use."""
        game_round = self._rounds.get(table_id)
        if game_round is None:
            game_round = BlackjackRound(table_id, rng=self._rng)
            self._rounds[table_id] = game_round
            logger.debug("Created round state for table %s", table_id)
        return game_round

    def snapshot(self, table_id: str) -> RoundSnapshot | None:
        game_round = self._rounds.get(table_id)
        return game_round.snapshot() if game_round is not None else None

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._rounds

    def __len__(self) -> int:
        return len(self._rounds)
