from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console

from currency_converter.config import Config, load_config
from currency_converter.models import LoadState
from currency_converter.session import ConverterSession
from currency_converter.ui.tui.config import DARK
from currency_converter.ui.tui.display import create_rates_table
from currency_converter.utils.errors import (
    ConfigurationError,
    UnknownCurrencyError,
    ValidationError,
)


app = typer.Typer(add_completion=False, help="Currency Converter CLI")
console = Console()


def _load(config_path: Optional[str]) -> Config:
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


def _ready_session(config: Config) -> ConverterSession:
    session = ConverterSession.from_config(config)
    state = asyncio.run(session.load_rates())
    if state != LoadState.READY:
        typer.secho(f"Could not load exchange rates: {session.last_error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return session


@app.command("tui")
def tui(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Start an interactive conversion session."""
    from currency_converter.ui.tui.app import ConverterTUI

    ConverterTUI(_load(config_path)).run()


@app.command("convert")
def convert(
    amount: str = typer.Argument(..., help="Amount to convert, e.g. 100"),
    source: str = typer.Argument(..., help="Currency to convert from, e.g. USD"),
    target: str = typer.Argument(..., help="Currency to convert to, e.g. PKR"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Fetch live rates and print a single conversion."""
    session = _ready_session(_load(config_path))
    try:
        record = session.convert(amount, source, target)
    except (ValidationError, UnknownCurrencyError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(str(record))


@app.command("rates")
def rates(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Print the current rates for the supported currencies."""
    config = _load(config_path)
    session = _ready_session(config)
    console.print(
        create_rates_table(session.store.rates, config.supported_currencies, config.base_currency, DARK)
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
