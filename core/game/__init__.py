"""Game resolvers, round state and the engine facade."""

from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import BlackjackRound, GameStateStore, RoundStage
from core.game.blackjack import BlackjackEngine, BlackjackMove
from core.game.roulette import RouletteBet, RouletteBetType, RouletteResolver
from core.game.baccarat import BaccaratResolver, BaccaratSide
from core.game.engine import (
    BaccaratAction,
    BlackjackAction,
    RouletteAction,
    TableGamesEngine,
    parse_action,
)

__all__ = [
    "BaccaratAction",
    "BaccaratResolver",
    "BaccaratSide",
    "BlackjackAction",
    "BlackjackEngine",
    "BlackjackMove",
    "BlackjackRound",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GameStateStore",
    "RouletteAction",
    "RouletteBet",
    "RouletteBetType",
    "RouletteResolver",
    "RoundStage",
    "TableGamesEngine",
    "parse_action",
]
