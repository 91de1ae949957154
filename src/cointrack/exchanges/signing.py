"""Request signing for HMAC-authenticated REST endpoints."""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode


def current_timestamp_ms() -> int:
    """Wall-clock milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def sign_query(secret: str, query: str) -> str:
    """Hex-encoded HMAC-SHA256 of ``query`` keyed with ``secret``."""
    return hmac.new(secret.encode(), query.encode(), hashlib.sha256).hexdigest()


class QueryBuilder:
    """Order-preserving query string builder.

    Parameters are encoded in insertion order so the string that is signed is
    byte-for-byte the string that goes on the wire.
    """

    def __init__(self) -> None:
        self._params: list[tuple[str, str]] = []

    def add(self, key: str, value: Any) -> "QueryBuilder":
        if any(k == key for k, _ in self._params):
            raise ValueError(f"Duplicate query parameter: {key}")
        self._params.append((key, str(value)))
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self._params)

    def encode(self) -> str:
        return urlencode(self._params)


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Timestamp and signature for exactly one request."""

    timestamp_ms: int
    query: str
    signature_hex: str

    @property
    def signed_query(self) -> str:
        """Query string to send: the signed query with ``signature`` appended."""
        return f"{self.query}&{urlencode([('signature', self.signature_hex)])}"


def sign_request(secret: str, timestamp_ms: int | None = None) -> SignedRequest:
    """Build the ``timestamp=<ms>`` query and sign it.

    The timestamp is sampled now unless one is given.
    """
    if timestamp_ms is None:
        timestamp_ms = current_timestamp_ms()
    query = QueryBuilder().add("timestamp", timestamp_ms).encode()
    return SignedRequest(
        timestamp_ms=timestamp_ms,
        query=query,
        signature_hex=sign_query(secret, query),
    )
