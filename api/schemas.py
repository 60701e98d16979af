"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from core.game.baccarat import BaccaratSide
from core.game.roulette import RouletteBetType


# Shared
class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    value: int


class LimitsResponse(BaseModel):
    gc: float
    sc: float


class TableResponse(BaseModel):
    """Table configuration."""

    table_id: str
    game_type: str
    name: str
    min_bet: LimitsResponse
    max_bet: LimitsResponse
    max_players: int
    house_edge: float


# Players
class CreatePlayerRequest(BaseModel):
    """Register a player with the configured starting balance."""

    player_id: str | None = Field(default=None, min_length=1)
    name: str = ""


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    gold_coins: float
    sweep_coins: float


class JoinTableRequest(BaseModel):
    player_id: str


class JoinTableResponse(BaseModel):
    success: bool
    table: TableResponse


# Blackjack
class BlackjackRequest(BaseModel):
    """A blackjack action. ``bet`` is required for the "bet" action."""

    player_id: str
    action: str = Field(..., description="bet, hit, stand or double")
    bet: Decimal | None = None


class BlackjackResponse(BaseModel):
    """
    Blackjack action result.

    A bet fills player_hand/dealer_card/player_score; a hit fills hand/score;
    stand and double fill the settlement fields.
    """

    success: bool = True
    result: str | None = None  # "bust" | "win" | "lose" | "push"
    player_hand: list[CardResponse] | None = None
    dealer_card: CardResponse | None = None
    player_score: int | None = None
    hand: list[CardResponse] | None = None
    score: int | None = None
    dealer_score: int | None = None
    dealer_hand: list[CardResponse] | None = None
    bet: float | None = None
    payout: float | None = None


# Roulette
class RouletteBetRequest(BaseModel):
    """A single roulette wager; ``payout`` defaults to the standard multiplier."""

    type: RouletteBetType
    numbers: list[int] = []
    amount: Decimal = Field(..., gt=0)
    payout: Decimal | None = Field(default=None, gt=0)


class RouletteRequest(BaseModel):
    player_id: str
    bets: list[RouletteBetRequest]


class SpinResponse(BaseModel):
    number: int
    color: str
    is_odd: bool
    dozen: int
    column: int


class RouletteBetResultResponse(BaseModel):
    type: str
    amount: float
    is_win: bool
    payout: float


class RouletteResponse(BaseModel):
    success: bool = True
    result: SpinResponse
    bet_results: list[RouletteBetResultResponse]
    total_payout: float


# Baccarat
class BaccaratRequest(BaseModel):
    player_id: str
    bet_type: BaccaratSide
    amount: Decimal = Field(..., gt=0)


class BaccaratHandResponse(BaseModel):
    cards: list[CardResponse]
    value: int
    is_natural: bool
    drew_third_card: bool


class BaccaratResultResponse(BaseModel):
    player_hand: BaccaratHandResponse
    banker_hand: BaccaratHandResponse
    winner: str


class BaccaratResponse(BaseModel):
    success: bool = True
    result: BaccaratResultResponse
    payout: float
    bet_type: str
    amount: float


# Generic dispatch
class GameActionRequest(BaseModel):
    """
    Tagged request routed by ``game_type``; the remaining fields are those
    of the matching game (action/bet, bets, or bet_type/amount).
    """

    model_config = ConfigDict(extra="allow")

    player_id: str
    game_type: str
    table_id: str


# State
class HandStateResponse(BaseModel):
    player_id: str
    cards: list[CardResponse]
    bet: float
    score: int
    is_soft: bool
    is_busted: bool
    is_doubled: bool


class RoundStateResponse(BaseModel):
    """Blackjack round; only the dealer's upcard is exposed."""

    table_id: str
    round_number: int
    stage: str
    cards_remaining: int
    dealer_upcard: CardResponse | None
    hands: list[HandStateResponse]


class EngineStateResponse(BaseModel):
    status: str
    tables: list[TableResponse]
    round: RoundStateResponse | None = None
