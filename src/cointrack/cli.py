"""Typer-based CLI for account and wallet queries."""

from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .errors import CointrackError

if TYPE_CHECKING:
    from .di import AppContainer
    from .exchanges.protocol import Balance
    from .wallet import Coin


# Import with local function to avoid circular imports
def _load_settings(config_path: Optional[Path] = None):
    from .config import load_settings
    return load_settings(config_path)


def _build_container(settings, keys_file: Optional[str] = None):
    from .di import build_container
    return build_container(settings, keys_file=keys_file)


app = typer.Typer(help="Exchange account and wallet tracker")
console = Console()
logger = logging.getLogger(__name__)


def run_cli(argv: list[str] | None = None) -> None:
    """Run CLI with optional argv parameter."""
    app(argv)


def init_components(config_path: Optional[Path] = None, keys: Optional[Path] = None) -> "AppContainer":
    """Load settings and credentials, then build the container."""
    settings = _load_settings(config_path)
    return _build_container(settings, str(keys) if keys else None)


def _fmt(value: Decimal) -> str:
    return f"{value.normalize():f}" if value else "0"


def _balances_table(balances: list["Balance"], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Asset", style="cyan")
    table.add_column("Free", justify="right")
    table.add_column("Locked", justify="right")
    table.add_column("Total", justify="right", style="green")
    for b in balances:
        table.add_row(b.asset, _fmt(b.free), _fmt(b.locked), _fmt(b.total))
    return table


def _coins_table(coins: list["Coin"]) -> Table:
    table = Table(title="Wallet")
    table.add_column("Coin", style="cyan")
    table.add_column("Free", justify="right")
    table.add_column("Locked", justify="right")
    table.add_column("Total", justify="right", style="green")
    for coin in coins:
        table.add_row(coin.name, _fmt(coin.free), _fmt(coin.locked), _fmt(coin.total))
    return table


@app.command()
def account(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
    keys: Optional[Path] = typer.Option(None, help="Path to JSON key file (overrides config)"),
    show_all: bool = typer.Option(False, "--all", help="Include zero balances"),
) -> None:
    """Fetch one account snapshot and print its balances."""
    try:
        balances = asyncio.run(_account_async(config, keys, show_all))
    except (CointrackError, ValueError) as e:
        logger.error("Account query failed: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not balances:
        console.print("[yellow]No balances to show[/yellow]")
        return
    console.print(_balances_table(balances, "Account balances"))


async def _account_async(config: Optional[Path], keys: Optional[Path], show_all: bool) -> list["Balance"]:
    container = init_components(config, keys)
    try:
        snapshot = await container.client.fetch_account_snapshot()
    finally:
        await container.close()
    return list(snapshot.balances) if show_all else snapshot.non_zero()


@app.command()
def wallet(
    coins: Optional[List[str]] = typer.Argument(None, help="Coins to track (added to configured coins)"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
    keys: Optional[Path] = typer.Option(None, help="Path to JSON key file (overrides config)"),
) -> None:
    """Track coins, refresh the wallet once, and print tracked balances."""
    try:
        tracked = asyncio.run(_wallet_async(coins or [], config, keys))
    except (CointrackError, ValueError) as e:
        logger.error("Wallet refresh failed: %s", e)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not tracked:
        console.print("[yellow]No coins tracked[/yellow]")
        return
    console.print(_coins_table(tracked))


async def _wallet_async(coins: list[str], config: Optional[Path], keys: Optional[Path]) -> list["Coin"]:
    container = init_components(config, keys)
    try:
        for name in coins:
            container.wallet.add_tracked_coin(name)
        await container.wallet.refresh()
    finally:
        await container.close()
    return container.wallet.tracked_coins


@app.command()
def config_show(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Print the effective configuration with secrets masked."""
    try:
        settings = _load_settings(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print_json(json.dumps(settings.redacted()))
