"""Table catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_engine, raise_for_failure
from api.schemas import JoinTableRequest, JoinTableResponse, TableResponse
from api.serializers import table_response
from core.game.engine import TableGamesEngine

router = APIRouter()

Engine = Annotated[TableGamesEngine, Depends(get_engine)]


@router.get("")
async def list_tables(engine: Engine) -> list[TableResponse]:
    """List every table."""
    return [table_response(t) for t in engine.get_tables()]


@router.get("/{table_id}")
async def get_table(table_id: str, engine: Engine) -> TableResponse:
    """Get one table."""
    table = engine.get_table(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return table_response(table)


@router.post("/{table_id}/join")
async def join_table(
    table_id: str,
    request: JoinTableRequest,
    engine: Engine,
) -> JoinTableResponse:
    """Join a table. Seat limits are not enforced."""
    result = engine.join_table(request.player_id, table_id)
    raise_for_failure(result)
    return JoinTableResponse(success=True, table=table_response(result.outcome))
