"""Rich display components for the TUI."""
from __future__ import annotations

from typing import Mapping, Optional, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table

from currency_converter.models import ConversionRecord, LoadState
from currency_converter.rate_store import resolve_rate
from currency_converter.utils.errors import UnknownCurrencyError

from .config import Theme, WELCOME_TEXT
from .renderer import format_rate, format_record, format_state


def create_welcome_panel(theme: Theme) -> Panel:
    return Panel(WELCOME_TEXT, title="Welcome", border_style=theme.primary, box=box.DOUBLE)


def create_error_panel(message: str, theme: Theme) -> Panel:
    return Panel(f"[bold]{message}[/]", title="Error", border_style=theme.error, box=box.HEAVY)


def create_result_panel(
    result: str,
    target: str,
    state: LoadState,
    theme: Theme,
    provider_date: Optional[str] = None,
) -> Panel:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Field", style=f"{theme.primary} bold", width=12)
    table.add_column("Value", style=theme.neutral)
    table.add_row("Result", f"[bold {theme.accent}]{result}[/] {target}")
    table.add_row("Rates", format_state(state))
    if provider_date:
        table.add_row("As of", provider_date)
    return Panel(table, title="Conversion", border_style=theme.primary, box=box.ROUNDED)


def create_history_table(records: Sequence[ConversionRecord], theme: Theme) -> Table:
    table = Table(title="Conversion History", box=box.SIMPLE_HEAD)
    table.add_column("#", width=3, style=theme.primary)
    table.add_column("Conversion", style=theme.neutral)
    for i, record in enumerate(records, start=1):
        table.add_row(str(i), format_record(record))
    return table


def create_rates_table(rates: Mapping[str, float], currencies: Sequence[str], base: str, theme: Theme) -> Table:
    table = Table(title=f"Rates per 1 {base}", box=box.SIMPLE_HEAD)
    table.add_column("Currency", style=f"{theme.primary} bold")
    table.add_column("Rate", justify="right", style=theme.neutral)
    for code in currencies:
        try:
            rate = resolve_rate(rates, code, base)
        except UnknownCurrencyError:
            rate = None
        table.add_row(code, format_rate(rate))
    return table
