"""cointrack: signed exchange account client and wallet tracker."""

__version__ = "0.1.0"

from .settings import Settings
from .credentials import Credentials, load as load_credentials
from .errors import (
    CointrackError,
    CredentialsError,
    NotFoundError,
    MalformedCredentialsError,
    RequestError,
    TransportError,
    ExchangeRejectedError,
    MalformedResponseError,
)
from .exchanges import AccountSnapshot, Balance, BinanceClient, ExchangeClient
from .wallet import Coin, Wallet

__all__ = [
    "__version__",
    "Settings",
    "Credentials",
    "load_credentials",
    "CointrackError",
    "CredentialsError",
    "NotFoundError",
    "MalformedCredentialsError",
    "RequestError",
    "TransportError",
    "ExchangeRejectedError",
    "MalformedResponseError",
    "AccountSnapshot",
    "Balance",
    "BinanceClient",
    "ExchangeClient",
    "Wallet",
    "Coin",
]
