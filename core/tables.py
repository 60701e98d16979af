"""Static table catalog."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from core.wallet import Currency


class GameType(Enum):
    """Games a table can host."""

    BLACKJACK = "blackjack"
    ROULETTE = "roulette"
    BACCARAT = "baccarat"


@dataclass(frozen=True)
class BetLimits:
    """A bet ceiling or floor, one scalar per currency."""

    gc: Decimal
    sc: Decimal

    def for_currency(self, currency: Currency) -> Decimal:
        return self.gc if currency == Currency.GC else self.sc


@dataclass(frozen=True)
class Table:
    """Immutable table configuration."""

    table_id: str
    game_type: GameType
    name: str
    min_bet: BetLimits
    max_bet: BetLimits
    max_players: int
    house_edge: float

    def accepts(self, amount: Decimal, currency: Currency = Currency.GC) -> bool:
        """Check that ``amount`` lies within the table limits for ``currency``."""
        if not amount.is_finite():
            return False
        return (
            self.min_bet.for_currency(currency)
            <= amount
            <= self.max_bet.for_currency(currency)
        )


DEFAULT_TABLES: tuple[Table, ...] = (
    Table(
        table_id="blackjack-1",
        game_type=GameType.BLACKJACK,
        name="Classic Blackjack",
        min_bet=BetLimits(gc=Decimal("5"), sc=Decimal("0.05")),
        max_bet=BetLimits(gc=Decimal("500"), sc=Decimal("5.0")),
        max_players=6,
        house_edge=0.5,
    ),
    Table(
        table_id="roulette-1",
        game_type=GameType.ROULETTE,
        name="European Roulette",
        min_bet=BetLimits(gc=Decimal("1"), sc=Decimal("0.01")),
        max_bet=BetLimits(gc=Decimal("100"), sc=Decimal("1.0")),
        max_players=12,
        house_edge=2.7,
    ),
    Table(
        table_id="baccarat-1",
        game_type=GameType.BACCARAT,
        name="Punto Banco",
        min_bet=BetLimits(gc=Decimal("10"), sc=Decimal("0.1")),
        max_bet=BetLimits(gc=Decimal("1000"), sc=Decimal("10.0")),
        max_players=8,
        house_edge=1.06,
    ),
)


class TableCatalog:
    """The fixed set of tables, keyed by table id."""

    def __init__(self, tables: Iterable[Table] = DEFAULT_TABLES) -> None:
        self._tables: dict[str, Table] = {t.table_id: t for t in tables}

    def all(self) -> list[Table]:
        """Return every table in registration order."""
        return list(self._tables.values())

    def get(self, table_id: str) -> Table | None:
        """Return the table with ``table_id``, if any."""
        return self._tables.get(table_id)

    def require(self, table_id: str, game_type: GameType) -> Table | None:
        """Return the table only if it exists and hosts ``game_type``."""
        table = self._tables.get(table_id)
        if table is None or table.game_type != game_type:
            return None
        return table

    def __len__(self) -> int:
        return len(self._tables)
