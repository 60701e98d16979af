"""Table games rules engine - UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, create_deck
from core.hand import Hand, baccarat_value, blackjack_score
from core.results import ActionResult, ErrorKind
from core.tables import GameType, Table, TableCatalog
from core.wallet import BalanceGateway, Currency, InMemoryBalanceStore, Player

__all__ = [
    "ActionResult",
    "BalanceGateway",
    "Card",
    "Currency",
    "Deck",
    "ErrorKind",
    "GameType",
    "Hand",
    "InMemoryBalanceStore",
    "Player",
    "Rank",
    "Suit",
    "Table",
    "TableCatalog",
    "baccarat_value",
    "blackjack_score",
    "create_deck",
]
