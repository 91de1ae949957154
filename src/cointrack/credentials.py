"""Credential store: loads one API key pair from a local JSON key file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, StrictStr, TypeAdapter, ValidationError

from .errors import MalformedCredentialsError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_KEYS_DIR = "keys/"


class Credentials(BaseModel):
    """API key pair, immutable once loaded."""

    api_key: SecretStr
    secret_key: SecretStr

    model_config = {"frozen": True, "extra": "forbid"}


class _KeyEntry(BaseModel):
    api_key: StrictStr = Field(min_length=1)
    secret_key: StrictStr = Field(min_length=1)

    model_config = {"extra": "ignore"}


_KEY_FILE = TypeAdapter(list[_KeyEntry])


def load(path: str | Path) -> Credentials:
    """Load the first key pair from a JSON key file.

    The file must contain a non-empty list of objects with string fields
    ``api_key`` and ``secret_key``. Values are returned verbatim.

    Raises:
        NotFoundError: path is missing, not a file, or unreadable
        MalformedCredentialsError: content is not a valid key list
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedCredentialsError(f"{path}: not UTF-8 text") from exc
    except OSError as exc:
        raise NotFoundError(str(path), exc.strerror) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedCredentialsError(f"{path}: invalid JSON: {exc}") from exc

    try:
        entries = _KEY_FILE.validate_python(data)
    except ValidationError as exc:
        raise MalformedCredentialsError(f"{path}: invalid key file: {exc}") from exc

    if not entries:
        raise MalformedCredentialsError(f"{path}: key list is empty")

    logger.debug("Loaded %d key pair(s) from %s, using the first", len(entries), path)
    first = entries[0]
    return Credentials(
        api_key=SecretStr(first.api_key),
        secret_key=SecretStr(first.secret_key),
    )
