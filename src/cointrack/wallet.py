"""Portfolio aggregation: merges exchange snapshots into a list of tracked coins."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from .exchanges.protocol import AccountSnapshot, ExchangeClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Coin:
    """A coin the user tracks, with its last known balance."""

    name: str
    free: Decimal = field(default_factory=Decimal)
    locked: Decimal = field(default_factory=Decimal)

    @property
    def total(self) -> Decimal:
        return self.free + self.locked


class Wallet:
    """Tracked coins backed by one exchange account."""

    def __init__(self, client: ExchangeClient):
        self.client = client
        self._coins: list[Coin] = []
        self.last_snapshot: AccountSnapshot | None = None

    @property
    def tracked_coins(self) -> list[Coin]:
        return list(self._coins)

    def get(self, name: str) -> Coin | None:
        wanted = name.upper()
        for coin in self._coins:
            if coin.name == wanted:
                return coin
        return None

    def add_tracked_coin(self, name: str) -> Coin:
        """Start tracking ``name``. Adding a coin twice returns the existing entry."""
        name = name.strip().upper()
        if not name:
            raise ValueError("Coin name must not be empty")

        existing = self.get(name)
        if existing is not None:
            return existing

        coin = Coin(name)
        if self.last_snapshot is not None:
            self._apply(coin, self.last_snapshot)
        self._coins.append(coin)
        logger.debug("Tracking coin %s", name)
        return coin

    async def refresh(self) -> AccountSnapshot:
        """Fetch a new snapshot and merge it into the tracked coins.

        Client errors propagate and leave the previous balances in place.
        """
        snapshot = await self.client.fetch_account_snapshot()
        for coin in self._coins:
            self._apply(coin, snapshot)
        self.last_snapshot = snapshot
        logger.info("Wallet refreshed: %d tracked coin(s)", len(self._coins))
        return snapshot

    @staticmethod
    def _apply(coin: Coin, snapshot: AccountSnapshot) -> None:
        balance = snapshot.balance(coin.name)
        if balance is None:
            coin.free = Decimal(0)
            coin.locked = Decimal(0)
        else:
            coin.free = balance.free
            coin.locked = balance.locked
