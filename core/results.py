"""Structured results returned by every engine entry point."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ErrorKind(Enum):
    """Failure categories."""

    NOT_FOUND = auto()  # unknown table or player, wrong game type
    VALIDATION = auto()  # bad amount, missing hand, insufficient funds
    UNRECOGNIZED = auto()  # unknown action or game type


# Failure messages
INVALID_BLACKJACK_TABLE = "Invalid blackjack table"
INVALID_ROULETTE_TABLE = "Invalid roulette table"
INVALID_BACCARAT_TABLE = "Invalid baccarat table"
TABLE_NOT_FOUND = "Table not found"
PLAYER_NOT_FOUND = "Player not found"
INVALID_BET_AMOUNT = "Invalid bet amount"
INVALID_BET_TYPE = "Invalid bet type"
NO_ACTIVE_HAND = "No active hand"
INSUFFICIENT_FUNDS_TO_DOUBLE = "Insufficient funds to double"
INVALID_ACTION = "Invalid action"
UNKNOWN_GAME_TYPE = "Unknown game type"


@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of a game action.

    Documented failures are reported here rather than raised, so a host can
    forward ``error`` to its caller unchanged. ``outcome`` holds the
    game-specific payload on success.
    """

    success: bool
    outcome: Any = None
    error: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, outcome: Any = None) -> "ActionResult":
        return cls(success=True, outcome=outcome)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "ActionResult":
        return cls(success=False, error=message, kind=kind)

    def __bool__(self) -> bool:
        return self.success
