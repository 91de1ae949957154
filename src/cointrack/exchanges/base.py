"""Base client class for exchange adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

import aiohttp

from ..credentials import Credentials
from .protocol import AccountSnapshot, Balance

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ProxyConfig:
    """HTTP proxy configuration."""

    def __init__(self, url: str | None = None, username: str | None = None, password: str | None = None):
        self.url = url
        self.username = username
        self.password = password

    @property
    def proxy_url(self) -> str | None:
        if not self.url:
            return None
        if self.username and self.password:
            protocol = self.url.split("://")[0] if "://" in self.url else "http"
            rest = self.url.split("://")[1] if "://" in self.url else self.url
            return f"{protocol}://{self.username}:{self.password}@{rest}"
        return self.url

    def __repr__(self) -> str:
        return f"ProxyConfig(url={self.url!r}, username={self.username!r})"


class BaseExchangeClient(ABC):
    """Base class for all exchange adapters.

    Holds the credentials and owns one lazily created aiohttp session. No
    per-request state (timestamps, signatures) is kept on the instance.
    """

    def __init__(
        self,
        name: str,
        credentials: Credentials,
        *,
        sandbox: bool = False,
        proxy: ProxyConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str | None = None,
    ):
        """Initialize exchange client.

        Args:
            name: Exchange name
            credentials: API key pair
            sandbox: Use sandbox/testnet environment
            proxy: Proxy configuration
            timeout: Total wall-clock bound for one request, in seconds
            base_url: Override for the REST base URL
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.name = name
        self.credentials = credentials
        self.sandbox = sandbox
        self.proxy = proxy or ProxyConfig()
        self.timeout = timeout
        self.base_url = base_url
        self.session: aiohttp.ClientSession | None = None

    def get_base_url(self) -> str:
        """Get base API URL.

        Subclasses override this to handle sandbox/testnet URLs. An explicit
        ``base_url`` always wins.
        """
        return self.base_url or "https://api.example.com"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    @abstractmethod
    async def fetch_account_snapshot(self) -> AccountSnapshot:
        """Fetch the current account snapshot."""
        ...

    async def get_balance(self, asset: str | None = None) -> list[Balance] | Balance:
        """Fetch account balance.

        Without ``asset`` returns every non-zero balance. With ``asset``
        returns that balance, or a zero balance if the account does not list it.
        """
        snapshot = await self.fetch_account_snapshot()
        if asset:
            found = snapshot.balance(asset)
            if found is not None:
                return found
            return Balance(asset.upper(), Decimal(0), Decimal(0))
        return snapshot.non_zero()

    async def close(self) -> None:
        """Close connections."""
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "BaseExchangeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, sandbox={self.sandbox}, base_url={self.get_base_url()!r})"
