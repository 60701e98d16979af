"""Game API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_engine, raise_for_failure
from api.schemas import (
    BaccaratRequest,
    BaccaratResponse,
    BlackjackRequest,
    BlackjackResponse,
    EngineStateResponse,
    GameActionRequest,
    RouletteRequest,
    RouletteResponse,
)
from api.serializers import (
    baccarat_response,
    blackjack_response,
    engine_state_response,
    outcome_response,
    roulette_response,
)
from core.game.engine import TableGamesEngine
from core.game.roulette import RouletteBet

router = APIRouter()

Engine = Annotated[TableGamesEngine, Depends(get_engine)]


@router.post("/blackjack/{table_id}")
async def play_blackjack(
    table_id: str,
    request: BlackjackRequest,
    engine: Engine,
) -> BlackjackResponse:
    """Bet, hit, stand or double at a blackjack table."""
    result = engine.play_blackjack(request.player_id, table_id, request.action, request.bet)
    raise_for_failure(result)
    return blackjack_response(result.outcome)


@router.post("/roulette/{table_id}")
async def play_roulette(
    table_id: str,
    request: RouletteRequest,
    engine: Engine,
) -> RouletteResponse:
    """Spin the wheel once for a list of bets."""
    bets = [
        RouletteBet(
            bet_type=b.type,
            numbers=tuple(b.numbers),
            amount=b.amount,
            payout=b.payout,
        )
        for b in request.bets
    ]
    result = engine.play_roulette(request.player_id, table_id, bets)
    raise_for_failure(result)
    return roulette_response(result.outcome)


@router.post("/baccarat/{table_id}")
async def play_baccarat(
    table_id: str,
    request: BaccaratRequest,
    engine: Engine,
) -> BaccaratResponse:
    """Deal one baccarat coup for a single bet."""
    result = engine.play_baccarat(request.player_id, table_id, request.bet_type, request.amount)
    raise_for_failure(result)
    return baccarat_response(result.outcome)


@router.post("/action")
async def game_action(
    request: GameActionRequest,
    engine: Engine,
) -> BlackjackResponse | RouletteResponse | BaccaratResponse:
    """Route a tagged request to the game named by ``game_type``."""
    payload = request.model_dump()
    player_id = payload.pop("player_id")
    result = engine.process_action(player_id, payload)
    raise_for_failure(result)
    return outcome_response(result.outcome)


@router.get("/state")
async def get_state(engine: Engine, table_id: str | None = None) -> EngineStateResponse:
    """Engine status, the table list and, for a blackjack table, its round."""
    return engine_state_response(engine.get_game_state(table_id))
