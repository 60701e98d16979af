"""Table games engine: table catalog, action dispatch and game resolvers."""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from random import Random
from typing import Any, Callable, Mapping, Union

from core.results import (
    INVALID_ACTION,
    INVALID_BET_AMOUNT,
    INVALID_BET_TYPE,
    PLAYER_NOT_FOUND,
    TABLE_NOT_FOUND,
    UNKNOWN_GAME_TYPE,
    ActionResult,
    ErrorKind,
)
from core.tables import GameType, Table, TableCatalog
from core.wallet import BalanceGateway, to_amount
from core.game.baccarat import BaccaratResolver, BaccaratSide
from core.game.blackjack import BlackjackEngine, BlackjackMove
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.roulette import RouletteBet, RouletteBetType, RouletteResolver
from core.game.state import GameStateStore, RoundSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlackjackAction:
    table_id: str
    move: BlackjackMove
    bet: Decimal | None = None


@dataclass(frozen=True)
class RouletteAction:
    table_id: str
    bets: tuple[RouletteBet, ...]


@dataclass(frozen=True)
class BaccaratAction:
    table_id: str
    bet_type: BaccaratSide
    amount: Decimal


GameAction = Union[BlackjackAction, RouletteAction, BaccaratAction]


class EngineStatus(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass(frozen=True)
class EngineState:
    """Catalog plus, when asked for a blackjack table, its current round."""

    status: EngineStatus
    tables: tuple[Table, ...]
    round: RoundSnapshot | None = None


class ActionParseError(Exception):
    """A tagged request could not be turned into a game action."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def _field(payload: Mapping[str, Any], name: str, alias: str | None = None) -> Any:
    """Read a snake_case key, falling back to its camelCase alias."""
    if name in payload:
        return payload[name]
    if alias is not None:
        return payload.get(alias)
    return None


def _parse_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ActionParseError(ErrorKind.VALIDATION, INVALID_BET_AMOUNT)
    try:
        amount = to_amount(value)
    except InvalidOperation:
        raise ActionParseError(ErrorKind.VALIDATION, INVALID_BET_AMOUNT) from None
    if not amount.is_finite():
        raise ActionParseError(ErrorKind.VALIDATION, INVALID_BET_AMOUNT)
    return amount


def _parse_blackjack(payload: Mapping[str, Any], table_id: str) -> BlackjackAction:
    try:
        move = BlackjackMove(payload.get("action"))
    except ValueError:
        raise ActionParseError(ErrorKind.UNRECOGNIZED, INVALID_ACTION) from None
    bet = payload.get("bet")
    return BlackjackAction(
        table_id=table_id,
        move=move,
        bet=_parse_amount(bet) if bet is not None else None,
    )


def _parse_roulette_bet(data: Mapping[str, Any]) -> RouletteBet:
    try:
        bet_type = RouletteBetType(_field(data, "bet_type", "type"))
    except ValueError:
        raise ActionParseError(ErrorKind.UNRECOGNIZED, INVALID_BET_TYPE) from None
    try:
        numbers = tuple(int(n) for n in data.get("numbers") or ())
    except (TypeError, ValueError):
        raise ActionParseError(ErrorKind.VALIDATION, INVALID_BET_TYPE) from None
    payout = data.get("payout")
    return RouletteBet(
        bet_type=bet_type,
        numbers=numbers,
        amount=_parse_amount(data.get("amount")),
        payout=_parse_amount(payout) if payout is not None else None,
    )


def _parse_roulette(payload: Mapping[str, Any], table_id: str) -> RouletteAction:
    bets = payload.get("bets") or []
    if not isinstance(bets, (list, tuple)) or not all(isinstance(b, Mapping) for b in bets):
        raise ActionParseError(ErrorKind.VALIDATION, INVALID_BET_TYPE)
    return RouletteAction(
        table_id=table_id,
        bets=tuple(_parse_roulette_bet(b) for b in bets),
    )


def _parse_baccarat(payload: Mapping[str, Any], table_id: str) -> BaccaratAction:
    try:
        bet_type = BaccaratSide(_field(payload, "bet_type", "betType"))
    except ValueError:
        raise ActionParseError(ErrorKind.UNRECOGNIZED, INVALID_BET_TYPE) from None
    return BaccaratAction(
        table_id=table_id,
        bet_type=bet_type,
        amount=_parse_amount(payload.get("amount")),
    )


_PARSERS: dict[GameType, Callable[[Mapping[str, Any], str], GameAction]] = {
    GameType.BLACKJACK: _parse_blackjack,
    GameType.ROULETTE: _parse_roulette,
    GameType.BACCARAT: _parse_baccarat,
}


def parse_action(payload: Mapping[str, Any]) -> GameAction:
    """
    Turn a tagged request ``{"game_type": ..., "table_id": ..., ...}`` into a
    typed action. camelCase keys (``gameType``, ``tableId``, ``betType``) are
    accepted too.

    Raises:
        ActionParseError: unknown game type, action or bet type, or a
            malformed amount
    """
    try:
        game_type = GameType(_field(payload, "game_type", "gameType"))
    except ValueError:
        raise ActionParseError(ErrorKind.UNRECOGNIZED, UNKNOWN_GAME_TYPE) from None
    table_id = str(_field(payload, "table_id", "tableId") or "")
    return _PARSERS[game_type](payload, table_id)


class TableGamesEngine:
    """
    Entry point for hosts.

    Owns the table catalog, the blackjack round store and one resolver per
    game. Every public call returns an ``ActionResult``. Calls against the
    same blackjack table must be serialized by the caller.
    """

    def __init__(
        self,
        wallet: BalanceGateway,
        catalog: TableCatalog | None = None,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self.wallet = wallet
        self.catalog = catalog or TableCatalog()
        self.events = events or EventEmitter()
        self._rng = rng or Random()
        self.store = GameStateStore(rng=self._rng)
        self.status = EngineStatus.WAITING

        self.blackjack_engine = BlackjackEngine(self.catalog, wallet, self.store, self.events)
        self.roulette_resolver = RouletteResolver(self.catalog, wallet, self._rng, self.events)
        self.baccarat_resolver = BaccaratResolver(self.catalog, wallet, self._rng, self.events)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to engine events."""
        self.events.subscribe(handler, event_type)

    def start(self) -> None:
        self.status = EngineStatus.PLAYING
        logger.info("Table games engine started with %d tables", len(self.catalog))

    def stop(self) -> None:
        self.status = EngineStatus.ENDED
        logger.info("Table games engine stopped")

    # Catalog

    def get_tables(self) -> list[Table]:
        return self.catalog.all()

    def get_table(self, table_id: str) -> Table | None:
        return self.catalog.get(table_id)

    def join_table(self, player_id: str, table_id: str) -> ActionResult:
        """Check the table and player exist. Seats are not tracked."""
        table = self.catalog.get(table_id)
        if table is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND, TABLE_NOT_FOUND)
        if self.wallet.get_player(player_id) is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND, PLAYER_NOT_FOUND)
        logger.info("Player %s joined %s", player_id, table_id)
        return ActionResult.ok(table)

    # Games

    def play_blackjack(
        self,
        player_id: str,
        table_id: str,
        action: BlackjackMove | str,
        bet: Decimal | None = None,
    ) -> ActionResult:
        return self.blackjack_engine.play(player_id, table_id, action, bet)

    def play_roulette(self, player_id: str, table_id: str, bets: list[RouletteBet]) -> ActionResult:
        return self.roulette_resolver.play(player_id, table_id, bets)

    def play_baccarat(
        self,
        player_id: str,
        table_id: str,
        bet_type: BaccaratSide,
        amount: Decimal,
    ) -> ActionResult:
        return self.baccarat_resolver.play(player_id, table_id, bet_type, amount)

    def execute(self, player_id: str, action: GameAction) -> ActionResult:
        """Route a typed action to its game."""
        if isinstance(action, BlackjackAction):
            return self.play_blackjack(player_id, action.table_id, action.move, action.bet)
        if isinstance(action, RouletteAction):
            return self.play_roulette(player_id, action.table_id, list(action.bets))
        if isinstance(action, BaccaratAction):
            return self.play_baccarat(player_id, action.table_id, action.bet_type, action.amount)
        return ActionResult.fail(ErrorKind.UNRECOGNIZED, UNKNOWN_GAME_TYPE)

    def process_action(self, player_id: str, payload: Mapping[str, Any]) -> ActionResult:
        """Parse a tagged request and execute it."""
        try:
            action = parse_action(payload)
        except ActionParseError as exc:
            logger.info("Rejected action from %s: %s", player_id, exc.message)
            self.events.emit_new(EventType.INVALID_ACTION, player_id=player_id, message=exc.message)
            return ActionResult.fail(exc.kind, exc.message)
        return self.execute(player_id, action)

    def validate_action(self, payload: Mapping[str, Any]) -> bool:
        """Check only that the request names a known game type."""
        game_type = _field(payload, "game_type", "gameType")
        return any(game_type == g.value for g in GameType)

    def get_game_state(self, table_id: str | None = None) -> EngineState:
        return EngineState(
            status=self.status,
            tables=tuple(self.catalog.all()),
            round=self.store.snapshot(table_id) if table_id is not None else None,
        )
