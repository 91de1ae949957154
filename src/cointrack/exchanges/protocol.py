"""Protocol definition for exchange clients."""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Protocol


class Balance:
    """Represents account balance for a single asset."""

    __slots__ = ("asset", "free", "locked")

    def __init__(self, asset: str, free: Decimal, locked: Decimal):
        self.asset = asset
        self.free = free
        self.locked = locked

    @property
    def total(self) -> Decimal:
        return self.free + self.locked

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Balance):
            return NotImplemented
        return (self.asset, self.free, self.locked) == (other.asset, other.free, other.locked)

    def __repr__(self) -> str:
        return f"Balance(asset={self.asset!r}, free={self.free}, locked={self.locked})"


class AccountSnapshot:
    """Point-in-time read of the balances held on an exchange account."""

    def __init__(self, balances: list[Balance] | tuple[Balance, ...], raw: Mapping[str, Any] | None = None):
        self.balances: tuple[Balance, ...] = tuple(balances)
        self.raw: Mapping[str, Any] = MappingProxyType(dict(raw or {}))

    def balance(self, asset: str) -> Balance | None:
        """Return the balance for ``asset`` (case-insensitive), or None."""
        wanted = asset.upper()
        for b in self.balances:
            if b.asset.upper() == wanted:
                return b
        return None

    def non_zero(self) -> list[Balance]:
        return [b for b in self.balances if b.free > 0 or b.locked > 0]

    def __len__(self) -> int:
        return len(self.balances)

    def __repr__(self) -> str:
        return f"AccountSnapshot(balances={len(self.balances)})"


class ExchangeClient(Protocol):
    """Protocol for authenticated exchange account access."""

    name: str

    async def fetch_account_snapshot(self) -> AccountSnapshot:
        """Fetch the current account snapshot.

        Each call signs a fresh request. Errors are raised, never mapped to an
        empty snapshot.

        Raises:
            ExchangeRejectedError: non-2xx HTTP status
            TransportError: connection, DNS or timeout failure
            MalformedResponseError: 2xx body is not a valid snapshot
        """
        ...

    async def get_balance(self, asset: str | None = None) -> list[Balance] | Balance:
        """Fetch account balance.

        Args:
            asset: Specific asset to fetch balance for (optional)

        Returns:
            Single Balance if asset specified, list of non-zero Balance objects otherwise
        """
        ...

    async def close(self) -> None:
        """Close the HTTP session."""
        ...
