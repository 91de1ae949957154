"""Exchange adapters and connectivity layer."""

from .protocol import ExchangeClient, Balance, AccountSnapshot
from .signing import QueryBuilder, SignedRequest, current_timestamp_ms, sign_query, sign_request
from .factory import create_exchange_client, create_exchange_client_from_settings, EXCHANGE_CLIENTS
from .base import BaseExchangeClient, ProxyConfig
from .binance import BinanceClient

__all__ = [
    "ExchangeClient",
    "Balance",
    "AccountSnapshot",
    "QueryBuilder",
    "SignedRequest",
    "current_timestamp_ms",
    "sign_query",
    "sign_request",
    "create_exchange_client",
    "create_exchange_client_from_settings",
    "EXCHANGE_CLIENTS",
    "BaseExchangeClient",
    "ProxyConfig",
    "BinanceClient",
]
