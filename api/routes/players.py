"""Player registration and balance lookup."""

from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_balance_store
from api.schemas import CreatePlayerRequest, PlayerResponse
from api.serializers import player_response
from config import config
from core.wallet import BalanceGateway

router = APIRouter()

Store = Annotated[BalanceGateway, Depends(get_balance_store)]


@router.post("", status_code=201)
async def create_player(request: CreatePlayerRequest, store: Store) -> PlayerResponse:
    """Register a player with the starting balance."""
    player = store.register(
        player_id=request.player_id or str(uuid4()),
        name=request.name,
        gold_coins=config.ledger.starting_gold_coins,
        sweep_coins=config.ledger.starting_sweep_coins,
    )
    return player_response(player)


@router.get("/{player_id}")
async def get_player(player_id: str, store: Store) -> PlayerResponse:
    """Get a player's balances."""
    player = store.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail="Player not found")
    return player_response(player)
