from __future__ import annotations

import asyncio
import io

import pytest
from rich.console import Console

from currency_converter.models import ConversionRecord, LoadState
from currency_converter.session import ConverterSession
from currency_converter.ui.tui import app as tui_app
from currency_converter.ui.tui.app import ConverterTUI
from currency_converter.ui.tui.config import DARK, LIGHT, toggle
from currency_converter.ui.tui.display import (
    create_error_panel,
    create_history_table,
    create_rates_table,
    create_result_panel,
    create_welcome_panel,
)
from currency_converter.ui.tui.renderer import format_rate, format_state
from currency_converter.utils.errors import FetchError


def recording_console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None)


def test_welcome_and_error_panels_are_renderable():
    assert hasattr(create_welcome_panel(DARK), "__rich_console__")
    assert hasattr(create_error_panel("boom", LIGHT), "__rich_console__")


def test_history_table_rows():
    records = [
        ConversionRecord(100, "USD", "PKR", "27800.00"),
        ConversionRecord(1, "USD", "EUR", "0.90"),
    ]
    table = create_history_table(records, DARK)
    assert table.row_count == 2


def test_rates_table_marks_unknown_codes():
    table = create_rates_table({"EUR": 0.9}, ["USD", "EUR", "CAD"], "USD", DARK)
    assert table.row_count == 3

    console = recording_console()
    console.print(table)
    output = console.file.getvalue()
    assert "1.0000" in output
    assert "0.9000" in output
    assert "—" in output


def test_result_panel_shows_result():
    console = recording_console()
    console.print(create_result_panel("27800.00", "PKR", LoadState.READY, DARK, provider_date="2026-10-19"))
    output = console.file.getvalue()
    assert "27800.00 PKR" in output
    assert "2026-10-19" in output


def test_renderer_helpers():
    assert format_rate(None) == "—"
    assert format_rate(1234.5) == "1,234.5000"
    assert "Failed" in format_state(LoadState.FAILED)


def test_theme_toggle():
    assert toggle(DARK) is LIGHT
    assert toggle(LIGHT) is DARK


def scripted(monkeypatch, amounts, actions, retries=()):
    """Drive the TUI prompts from fixed answers."""
    amounts, actions, retries = iter(amounts), iter(actions), iter(retries)
    monkeypatch.setattr(tui_app, "ask_amount", lambda: next(amounts))
    monkeypatch.setattr(tui_app, "ask_currency", lambda label, choices, default: default)
    monkeypatch.setattr(tui_app, "ask_action", lambda: next(actions))
    monkeypatch.setattr(tui_app, "ask_yes_no", lambda question, default=True: next(retries))


def test_tui_session_converts_and_renders_history(config, stub_provider, monkeypatch):
    scripted(monkeypatch, amounts=["100", "abc", "5"], actions=["convert", "theme", "convert", "quit"])
    session = ConverterSession(stub_provider)
    tui = ConverterTUI(config, session=session, console=recording_console())

    tui.run()

    output = tui.console.file.getvalue()
    assert [str(r) for r in session.get_history()] == ["5 USD = 1390.00 PKR", "100 USD = 27800.00 PKR"]
    assert "Amount is not a number" in output
    assert "Conversion History" in output
    assert tui.theme is LIGHT


def test_tui_stops_when_user_declines_retry(config, make_provider, monkeypatch):
    scripted(monkeypatch, amounts=[], actions=[], retries=[False])
    provider = make_provider(error=FetchError("HTTP 500"))
    tui = ConverterTUI(config, session=ConverterSession(provider), console=recording_console())

    tui.run()

    assert provider.calls == 1
    assert "Could not load exchange rates" in tui.console.file.getvalue()


def test_tui_retry_then_success(config, make_provider, monkeypatch):
    provider = make_provider(error=FetchError("HTTP 500"))

    def retry_and_fix(question, default=True):
        provider.error = None
        return True

    scripted(monkeypatch, amounts=["1"], actions=["quit"])
    monkeypatch.setattr(tui_app, "ask_yes_no", retry_and_fix)
    session = ConverterSession(provider)
    tui = ConverterTUI(config, session=session, console=recording_console())

    tui.run()

    assert provider.calls == 2
    assert session.latest_result == "278.00"


def test_currency_choices_follow_loaded_table(config, stub_provider):
    session = ConverterSession(stub_provider)
    tui = ConverterTUI(config, session=session, console=recording_console())
    assert tui.available_currencies() == []

    asyncio.run(session.load_rates())

    # Sample table has no AUD or CAD
    assert tui.available_currencies() == ["USD", "EUR", "GBP", "JPY", "PKR"]


def test_default_choice_falls_back_to_first_available():
    assert ConverterTUI._default_choice("CAD", ["USD", "EUR"]) == "USD"
    assert ConverterTUI._default_choice("EUR", ["USD", "EUR"]) == "EUR"
