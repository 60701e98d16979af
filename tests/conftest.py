"""Pytest fixtures for table games tests."""

import pytest
from decimal import Decimal
from random import Random

from core.cards import Card, Deck
from core.tables import TableCatalog
from core.wallet import InMemoryBalanceStore
from core.game import EventEmitter, TableGamesEngine


def parse_cards(spec: str) -> list[Card]:
    """Build cards from a string like 'AS KH 9d'."""
    return [Card.from_string(s) for s in spec.split()]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def cards():
    """Card parser: cards('AS KH') -> [Card, Card]."""
    return parse_cards


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def catalog():
    """The default three-table catalog."""
    return TableCatalog()


@pytest.fixture
def wallet():
    """Balance store with one funded player and one broke player."""
    store = InMemoryBalanceStore()
    store.register("alice", "Alice", gold_coins=Decimal("1000"), sweep_coins=Decimal("10"))
    store.register("bob", "Bob", gold_coins=Decimal("0"), sweep_coins=Decimal("50"))
    return store


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def engine(wallet, rng, events):
    """Table games engine over the test wallet."""
    e = TableGamesEngine(wallet=wallet, rng=rng, events=events)
    e.start()
    return e


@pytest.fixture
def stack_blackjack(engine):
    """
    Preload a blackjack table's deck so the next cards come out in order.

    Deal order on a bet is player, player, dealer (up), dealer (hole).
    """

    def _stack(spec: str, table_id: str = "blackjack-1") -> None:
        game_round = engine.store.get_or_create(table_id)
        game_round.deck = Deck.stacked(parse_cards(spec))

    return _stack


@pytest.fixture
def gold(wallet):
    """Gold-coin balance lookup: gold("alice") -> Decimal."""

    def _gold(player_id: str) -> Decimal:
        return wallet.get_player(player_id).balance.gold_coins

    return _gold
