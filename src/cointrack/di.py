from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exchanges.factory import create_exchange_client_from_settings
from .exchanges.protocol import ExchangeClient
from .wallet import Wallet

if TYPE_CHECKING:
    from .settings import Settings


@dataclass(slots=True)
class AppContainer:
    settings: "Settings"
    client: ExchangeClient
    wallet: Wallet

    async def close(self) -> None:
        await self.client.close()


def build_container(settings: "Settings", *, keys_file: str | None = None) -> AppContainer:
    """Build the application container.

    Loads credentials for the wallet's exchange; credential errors propagate
    so startup aborts.
    """
    client = create_exchange_client_from_settings(
        settings, settings.wallet.exchange, keys_file=keys_file
    )
    wallet = Wallet(client)
    for coin in settings.wallet.coins:
        wallet.add_tracked_coin(coin)
    return AppContainer(settings=settings, client=client, wallet=wallet)
