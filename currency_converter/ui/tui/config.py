"""TUI themes and style constants."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    name: str
    primary: str
    success: str
    warning: str
    error: str
    neutral: str
    accent: str


LIGHT = Theme(
    name="light",
    primary="blue",
    success="green4",
    warning="dark_orange3",
    error="red3",
    neutral="black",
    accent="purple4",
)

DARK = Theme(
    name="dark",
    primary="cyan",
    success="green",
    warning="yellow",
    error="red",
    neutral="white",
    accent="magenta",
)


def toggle(theme: Theme) -> Theme:
    return LIGHT if theme is DARK else DARK


WELCOME_TEXT = (
    """
[bold]Currency Converter[/bold]
Convert between different currencies with ease.

Rates are fetched once when the session starts.
    """
    .strip()
)
