"""European single-zero roulette."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from random import Random
from typing import Sequence

from core.results import (
    INVALID_ROULETTE_TABLE,
    PLAYER_NOT_FOUND,
    ActionResult,
    ErrorKind,
)
from core.tables import GameType, TableCatalog
from core.wallet import BalanceGateway, Currency
from core.game.events import EventEmitter, EventType

logger = logging.getLogger(__name__)

WHEEL_SIZE = 37  # 0-36, no double zero

RED_NUMBERS = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)


class RouletteBetType(Enum):
    """Bet categories."""

    STRAIGHT = "straight"
    SPLIT = "split"
    STREET = "street"
    CORNER = "corner"
    LINE = "line"
    DOZEN = "dozen"
    COLUMN = "column"
    RED = "red"
    BLACK = "black"
    ODD = "odd"
    EVEN = "even"
    LOW = "low"
    HIGH = "high"


# Total returned per unit staked on a win, stake included
STANDARD_PAYOUTS: dict[RouletteBetType, Decimal] = {
    RouletteBetType.STRAIGHT: Decimal("36"),
    RouletteBetType.SPLIT: Decimal("18"),
    RouletteBetType.STREET: Decimal("12"),
    RouletteBetType.CORNER: Decimal("9"),
    RouletteBetType.LINE: Decimal("6"),
    RouletteBetType.DOZEN: Decimal("3"),
    RouletteBetType.COLUMN: Decimal("3"),
    RouletteBetType.RED: Decimal("2"),
    RouletteBetType.BLACK: Decimal("2"),
    RouletteBetType.ODD: Decimal("2"),
    RouletteBetType.EVEN: Decimal("2"),
    RouletteBetType.LOW: Decimal("2"),
    RouletteBetType.HIGH: Decimal("2"),
}


@dataclass(frozen=True)
class RouletteBet:
    """
    A single wager.

    ``payout`` is the multiplier applied to ``amount`` on a win and is taken
    as given; it defaults to the standard multiplier for the bet type.
    For dozen and column bets ``numbers[0]`` is the dozen or column index.
    """

    bet_type: RouletteBetType
    numbers: tuple[int, ...]
    amount: Decimal
    payout: Decimal | None = None

    @property
    def multiplier(self) -> Decimal:
        if self.payout is None:
            return STANDARD_PAYOUTS[self.bet_type]
        return self.payout


@dataclass(frozen=True)
class SpinResult:
    number: int
    color: str
    is_odd: bool
    dozen: int
    column: int


@dataclass(frozen=True)
class BetResult:
    bet_type: RouletteBetType
    amount: Decimal
    is_win: bool
    payout: Decimal


@dataclass(frozen=True)
class RouletteOutcome:
    result: SpinResult
    bet_results: tuple[BetResult, ...]
    total_payout: Decimal


def describe_number(number: int) -> SpinResult:
    """Derive color, parity, dozen and column for a wheel number."""
    if not 0 <= number < WHEEL_SIZE:
        raise ValueError(f"Not a wheel number: {number}")

    if number == 0:
        color = "green"
    elif number in RED_NUMBERS:
        color = "red"
    else:
        color = "black"

    return SpinResult(
        number=number,
        color=color,
        is_odd=number % 2 == 1,
        dozen=0 if number == 0 else (number - 1) // 12 + 1,
        column=0 if number == 0 else (number - 1) % 3 + 1,
    )


def bet_wins(bet: RouletteBet, result: SpinResult) -> bool:
    """Check a bet against a spin. Zero loses every outside bet."""
    n = result.number
    checks = {
        RouletteBetType.RED: lambda: result.color == "red",
        RouletteBetType.BLACK: lambda: result.color == "black",
        RouletteBetType.ODD: lambda: n != 0 and result.is_odd,
        RouletteBetType.EVEN: lambda: n != 0 and not result.is_odd,
        RouletteBetType.LOW: lambda: 1 <= n <= 18,
        RouletteBetType.HIGH: lambda: 19 <= n <= 36,
        RouletteBetType.DOZEN: lambda: bool(bet.numbers) and bet.numbers[0] == result.dozen,
        RouletteBetType.COLUMN: lambda: bool(bet.numbers) and bet.numbers[0] == result.column,
    }
    check = checks.get(bet.bet_type)
    if check is None:
        # straight and the other inside bets win on the covered numbers
        return n in bet.numbers
    return check()


class RouletteResolver:
    """Stateless single-spin roulette rounds."""

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

    def spin(self) -> SpinResult:
        return describe_number(self._rng.randrange(WHEEL_SIZE))

    def play(self, player_id: str, table_id: str, bets: Sequence[RouletteBet]) -> ActionResult:
        """Spin once, settle every bet and credit the total in gold coins."""
        if self.catalog.require(table_id, GameType.ROULETTE) is None:
            self.events.emit_new(EventType.INVALID_ACTION, message=INVALID_ROULETTE_TABLE)
            return ActionResult.fail(ErrorKind.NOT_FOUND, INVALID_ROULETTE_TABLE)
        if self.wallet.get_player(player_id) is None:
            self.events.emit_new(EventType.INVALID_ACTION, message=PLAYER_NOT_FOUND)
            return ActionResult.fail(ErrorKind.NOT_FOUND, PLAYER_NOT_FOUND)

        result = self.spin()
        self.events.emit_new(
            EventType.WHEEL_SPUN,
            table_id=table_id,
            number=result.number,
            color=result.color,
        )

        bet_results = []
        for bet in bets:
            is_win = bet_wins(bet, result)
            payout = bet.amount * bet.multiplier if is_win else Decimal("0")
            bet_results.append(
                BetResult(bet_type=bet.bet_type, amount=bet.amount, is_win=is_win, payout=payout)
            )

        total_payout = sum((b.payout for b in bet_results), Decimal("0"))
        if total_payout > 0:
            self.wallet.add_balance(player_id, total_payout, Currency.GC)
            self.events.emit_new(
                EventType.PAYOUT_CREDITED,
                player_id=player_id,
                amount=str(total_payout),
                currency=Currency.GC.value,
            )

        logger.info(
            "Roulette %s: %d %s for %s, %d bet(s), payout %s",
            table_id,
            result.number,
            result.color,
            player_id,
            len(bet_results),
            total_payout,
        )
        return ActionResult.ok(
            RouletteOutcome(
                result=result,
                bet_results=tuple(bet_results),
                total_payout=total_payout,
            )
        )
