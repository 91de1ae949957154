from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr

from .credentials import DEFAULT_KEYS_DIR


class ProxySettings(BaseModel):
    enabled: bool = False
    url: str | None = None
    username: str | None = None
    password: SecretStr | None = None

    model_config = {"extra": "forbid"}


class ExchangeSettings(BaseModel):
    enabled: bool = True
    sandbox: bool = False
    keys_file: str = DEFAULT_KEYS_DIR + "keys.json"
    timeout: float = Field(default=10.0, gt=0)
    base_url: str | None = None

    model_config = {"extra": "forbid"}


def _default_exchanges() -> dict[str, ExchangeSettings]:
    return {"binance": ExchangeSettings()}


class WalletSettings(BaseModel):
    exchange: str = "binance"
    coins: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    env: str = "dev"
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    exchanges: dict[str, ExchangeSettings] = Field(default_factory=_default_exchanges)
    wallet: WalletSettings = Field(default_factory=WalletSettings)

    model_config = {"extra": "forbid"}

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        proxy = data.get("proxy")
        if isinstance(proxy, dict) and proxy.get("password") is not None:
            proxy["password"] = "***"
        return data
