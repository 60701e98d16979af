"""Process-wide engine and balance store."""

import logging
from random import Random

from fastapi import HTTPException

from config import config
from core.results import ActionResult, ErrorKind
from core.wallet import BalanceGateway, create_balance_store
from core.game.engine import TableGamesEngine

logger = logging.getLogger(__name__)

# Global instances
_balance_store: BalanceGateway | None = None
_engine: TableGamesEngine | None = None


def get_balance_store() -> BalanceGateway:
    """Get or create the balance store."""
    global _balance_store
    if _balance_store is None:
        _balance_store = create_balance_store(config.ledger.backend, config.redis.url)
        logger.info("Using %s for player balances", type(_balance_store).__name__)
    return _balance_store


def get_engine() -> TableGamesEngine:
    """Get or create the table games engine."""
    global _engine
    if _engine is None:
        _engine = TableGamesEngine(
            wallet=get_balance_store(),
            rng=Random(config.engine.seed),
        )
        _engine.start()
    return _engine


def reset() -> None:
    """Drop the global engine and store; the next request builds new ones."""
    global _balance_store, _engine
    if _engine is not None:
        _engine.stop()
    _balance_store = None
    _engine = None


def raise_for_failure(result: ActionResult) -> None:
    """Turn a failed engine result into an HTTP error."""
    if result.success:
        return
    status_code = 404 if result.kind == ErrorKind.NOT_FOUND else 400
    raise HTTPException(status_code=status_code, detail=result.error)
