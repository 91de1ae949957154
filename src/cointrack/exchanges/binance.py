"""Binance exchange adapter."""

from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal, InvalidOperation

import aiohttp
from pydantic import BaseModel, StrictStr, ValidationError
from yarl import URL

from .. import __version__
from ..credentials import Credentials
from ..errors import ExchangeRejectedError, MalformedResponseError, TransportError
from .base import DEFAULT_TIMEOUT, BaseExchangeClient, ProxyConfig
from .protocol import AccountSnapshot, Balance
from .signing import sign_request

logger = logging.getLogger(__name__)

ACCOUNT_PATH = "/api/v3/account"


class _BalancePayload(BaseModel):
    asset: StrictStr
    free: StrictStr
    locked: StrictStr

    model_config = {"extra": "ignore"}


class _AccountPayload(BaseModel):
    balances: list[_BalancePayload]

    model_config = {"extra": "allow"}


def _to_decimal(value: str, field: str, asset: str) -> Decimal:
    try:
        result = Decimal(value)
    except InvalidOperation as exc:
        raise MalformedResponseError(f"{asset}.{field} is not a decimal: {value!r}") from exc
    if not result.is_finite():
        raise MalformedResponseError(f"{asset}.{field} is not finite: {value!r}")
    return result


def parse_account_snapshot(body: bytes | str) -> AccountSnapshot:
    """Decode an account response body into an AccountSnapshot.

    Raises:
        MalformedResponseError: body is not JSON or lacks a valid ``balances`` list
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise MalformedResponseError(f"Response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response root must be an object, got {type(data).__name__}")

    try:
        payload = _AccountPayload.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected account response: {exc}") from exc

    balances = [
        Balance(
            b.asset,
            _to_decimal(b.free, "free", b.asset),
            _to_decimal(b.locked, "locked", b.asset),
        )
        for b in payload.balances
    ]
    return AccountSnapshot(balances, raw=data)


def _rejection(status: int, body: bytes) -> ExchangeRejectedError:
    code: int | None = None
    message: str | None = None
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict):
        if isinstance(data.get("code"), int):
            code = data["code"]
        if isinstance(data.get("msg"), str):
            message = data["msg"]
    elif body:
        message = body[:200].decode("utf-8", errors="replace")
    return ExchangeRejectedError(status, code=code, message=message)


class BinanceClient(BaseExchangeClient):
    """Binance spot account client."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        sandbox: bool = False,
        proxy: ProxyConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str | None = None,
    ):
        super().__init__(
            "binance",
            credentials,
            sandbox=sandbox,
            proxy=proxy,
            timeout=timeout,
            base_url=base_url,
        )

    def get_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.sandbox:
            return "https://testnet.binance.vision"
        return "https://api.binance.com"

    def _get_headers(self) -> dict[str, str]:
        return {
            "X-MBX-APIKEY": self.credentials.api_key.get_secret_value(),
            "User-Agent": f"cointrack/{__version__}",
        }

    def _account_url(self) -> tuple[URL, int]:
        """Sign a fresh request and return the account URL and its timestamp."""
        signed = sign_request(self.credentials.secret_key.get_secret_value())
        url = URL(f"{self.get_base_url()}{ACCOUNT_PATH}?{signed.signed_query}", encoded=True)
        return url, signed.timestamp_ms

    async def fetch_account_snapshot(self) -> AccountSnapshot:
        """Fetch account information with a freshly signed request.

        Not retried: a rejected or malformed response is raised immediately.
        """
        session = await self._ensure_session()
        url, timestamp_ms = self._account_url()
        logger.debug("GET %s%s timestamp=%d", self.get_base_url(), ACCOUNT_PATH, timestamp_ms)

        try:
            async with session.get(
                url,
                headers=self._get_headers(),
                proxy=self.proxy.proxy_url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                status = resp.status
                body = await resp.read()
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Request to {self.name} timed out after {self.timeout}s") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Request to {self.name} failed: {exc}") from exc

        if not 200 <= status < 300:
            error = _rejection(status, body)
            logger.warning("Binance rejected account request: %s", error)
            raise error

        snapshot = parse_account_snapshot(body)
        logger.info("Fetched Binance account snapshot with %d balances", len(snapshot))
        return snapshot
