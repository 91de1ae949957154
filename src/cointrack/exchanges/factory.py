"""Factory for creating exchange client instances."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Type

from .. import credentials as credential_store
from ..credentials import Credentials
from .base import DEFAULT_TIMEOUT, BaseExchangeClient, ProxyConfig
from .binance import BinanceClient

if TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)


EXCHANGE_CLIENTS: dict[str, Type[BaseExchangeClient]] = {
    "binance": BinanceClient,
}


def create_exchange_client(
    exchange: str,
    credentials: Credentials,
    *,
    sandbox: bool = False,
    proxy: dict[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> BaseExchangeClient:
    """Create an exchange client instance.

    Args:
        exchange: Exchange name (case-insensitive)
        credentials: API key pair
        sandbox: Use sandbox/testnet environment
        proxy: Proxy configuration (url, username, password)
        timeout: Total wall-clock bound for one request, in seconds
        base_url: Override for the REST base URL

    Returns:
        Configured exchange client

    Raises:
        ValueError: If exchange is not supported
    """
    exchange_lower = exchange.lower()

    if exchange_lower not in EXCHANGE_CLIENTS:
        supported = ", ".join(EXCHANGE_CLIENTS.keys())
        raise ValueError(
            f"Unsupported exchange: {exchange}. Supported exchanges: {supported}"
        )

    client_class = EXCHANGE_CLIENTS[exchange_lower]

    proxy_config = None
    if proxy:
        proxy_config = ProxyConfig(
            url=proxy.get("url"),
            username=proxy.get("username"),
            password=proxy.get("password"),
        )

    return client_class(credentials, sandbox=sandbox, proxy=proxy_config, timeout=timeout, base_url=base_url)


def create_exchange_client_from_settings(
    settings: "Settings",
    exchange: str,
    *,
    keys_file: str | None = None,
) -> BaseExchangeClient:
    """Load credentials for ``exchange`` and build its client.

    Credential errors propagate: without a key pair nothing else can run.

    Raises:
        ValueError: exchange is not configured or is disabled
        NotFoundError: key file is missing
        MalformedCredentialsError: key file is invalid
    """
    exchange_config = settings.exchanges.get(exchange)
    if exchange_config is None:
        raise ValueError(f"Exchange {exchange} is not configured")
    if not exchange_config.enabled:
        raise ValueError(f"Exchange {exchange} is disabled")

    path = keys_file or exchange_config.keys_file
    creds = credential_store.load(path)

    proxy = None
    if settings.proxy.enabled and settings.proxy.url:
        proxy = {
            "url": settings.proxy.url,
            "username": settings.proxy.username,
            "password": settings.proxy.password.get_secret_value() if settings.proxy.password else None,
        }

    client = create_exchange_client(
        exchange,
        creds,
        sandbox=exchange_config.sandbox,
        proxy=proxy,
        timeout=exchange_config.timeout,
        base_url=exchange_config.base_url,
    )
    logger.info("Initialized exchange client for %s (sandbox=%s)", exchange, exchange_config.sandbox)
    return client
