"""Formatting helpers for the TUI."""
from __future__ import annotations

from typing import Optional

from currency_converter.models import ConversionRecord, LoadState


def format_rate(rate: Optional[float]) -> str:
    if rate is None:
        return "—"
    return f"{rate:,.4f}"


def format_record(record: ConversionRecord) -> str:
    return str(record)


def format_state(state: LoadState) -> str:
    colors = {
        LoadState.IDLE: "white",
        LoadState.LOADING: "yellow",
        LoadState.READY: "green",
        LoadState.FAILED: "red",
    }
    return f"[{colors[state]}]{state.value.title()}[/]"
