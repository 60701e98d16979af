"""Player balances: the gateway the engine reads and credits."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import redis

logger = logging.getLogger(__name__)


class Currency(Enum):
    """The two independent player ledgers."""

    GC = "GC"  # gold coins
    SC = "SC"  # sweep coins


@dataclass
class Balance:
    """Gold-coin and sweep-coin ledgers."""

    gold_coins: Decimal = Decimal("0")
    sweep_coins: Decimal = Decimal("0")

    def get(self, currency: Currency) -> Decimal:
        return self.gold_coins if currency == Currency.GC else self.sweep_coins


@dataclass
class Player:
    """A player as seen by the engine."""

    player_id: str
    name: str = ""
    balance: Balance = field(default_factory=Balance)


def to_amount(value: int | float | str | Decimal) -> Decimal:
    """Convert a numeric amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class BalanceGateway(ABC):
    """
    Player lookup and credit operations.

    Implementations must make ``add_balance`` atomic per player; the engine
    never locks around it.
    """

    @abstractmethod
    def get_player(self, player_id: str) -> Player | None:
        """Return a snapshot of the player, or None if unknown."""
        ...

    @abstractmethod
    def add_balance(self, player_id: str, amount: Decimal, currency: Currency) -> None:
        """Credit ``amount`` to one of the player's ledgers."""
        ...

    @abstractmethod
    def register(
        self,
        player_id: str,
        name: str = "",
        gold_coins: Decimal = Decimal("0"),
        sweep_coins: Decimal = Decimal("0"),
    ) -> Player:
        """Create or replace a player record."""
        ...

    def can_afford(self, player_id: str, amount: Decimal, currency: Currency) -> bool:
        """Check the player's ledger covers ``amount``."""
        player = self.get_player(player_id)
        if player is None:
            return False
        return player.balance.get(currency) >= amount


class InMemoryBalanceStore(BalanceGateway):
    """Process-local balance store for development and tests."""

    def __init__(self) -> None:
        self._players: dict[str, Player] = {}
        self._lock = threading.Lock()

    def register(
        self,
        player_id: str,
        name: str = "",
        gold_coins: Decimal = Decimal("0"),
        sweep_coins: Decimal = Decimal("0"),
    ) -> Player:
        """Create or replace a player record."""
        player = Player(
            player_id=player_id,
            name=name,
            balance=Balance(to_amount(gold_coins), to_amount(sweep_coins)),
        )
        with self._lock:
            self._players[player_id] = player
        logger.info("Registered player %s", player_id)
        return self.get_player(player_id)  # type: ignore[return-value]

    def get_player(self, player_id: str) -> Player | None:
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                return None
            return Player(
                player_id=player.player_id,
                name=player.name,
                balance=Balance(player.balance.gold_coins, player.balance.sweep_coins),
            )

    def add_balance(self, player_id: str, amount: Decimal, currency: Currency) -> None:
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                raise KeyError(f"Unknown player: {player_id}")
            if currency == Currency.GC:
                player.balance.gold_coins += amount
            else:
                player.balance.sweep_coins += amount
        logger.debug("Credited %s %s to %s", amount, currency.value, player_id)


class RedisBalanceStore(BalanceGateway):
    """
    Redis-backed balance store; one hash per player.

    Credits use HINCRBYFLOAT, so concurrent payouts to one player stay atomic
    on the server. The client is the synchronous one because the engine calls
    the gateway synchronously in the middle of settling a hand. Inside the
    async routes each call therefore blocks the event loop for one
    round-trip.
    """

    FIELDS = {Currency.GC: "gold_coins", Currency.SC: "sweep_coins"}

    def __init__(self, redis_client: "redis.Redis") -> None:
        self._redis = redis_client
        self._prefix = "tablegames:player:"

    def _key(self, player_id: str) -> str:
        """Get Redis key for player."""
        return f"{self._prefix}{player_id}"

    def register(
        self,
        player_id: str,
        name: str = "",
        gold_coins: Decimal = Decimal("0"),
        sweep_coins: Decimal = Decimal("0"),
    ) -> Player:
        """Create or replace a player record."""
        self._redis.hset(
            self._key(player_id),
            mapping={
                "name": name,
                "gold_coins": str(gold_coins),
                "sweep_coins": str(sweep_coins),
            },
        )
        logger.info("Registered player %s", player_id)
        return Player(player_id, name, Balance(to_amount(gold_coins), to_amount(sweep_coins)))

    def get_player(self, player_id: str) -> Player | None:
        data = self._redis.hgetall(self._key(player_id))
        if not data:
            return None
        data = {
            (k.decode() if isinstance(k, bytes) else k): (v.decode() if isinstance(v, bytes) else v)
            for k, v in data.items()
        }
        return Player(
            player_id=player_id,
            name=data.get("name", ""),
            balance=Balance(
                gold_coins=Decimal(data.get("gold_coins", "0")),
                sweep_coins=Decimal(data.get("sweep_coins", "0")),
            ),
        )

    def add_balance(self, player_id: str, amount: Decimal, currency: Currency) -> None:
        # HINCRBYFLOAT is atomic on the server
        self._redis.hincrbyfloat(self._key(player_id), self.FIELDS[currency], float(amount))
        logger.debug("Credited %s %s to %s", amount, currency.value, player_id)


def create_balance_store(backend: str, redis_url: str | None = None) -> BalanceGateway:
    """
    Build the configured balance store.

    Falls back to the in-memory store when Redis is requested but unreachable.
    """
    if backend == "redis" and redis_url:
        client = redis.Redis.from_url(redis_url, decode_responses=True)
        try:
            client.ping()
        except redis.RedisError as exc:
            logger.warning("Redis unavailable (%s); using in-memory balances", exc)
        else:
            return RedisBalanceStore(client)
    return InMemoryBalanceStore()
