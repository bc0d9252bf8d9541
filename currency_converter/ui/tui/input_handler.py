"""Prompt helpers for the TUI."""
from __future__ import annotations

from typing import Sequence

from rich.prompt import Confirm, Prompt


def ask_amount() -> str:
    # Returned raw; parsing and validation belong to the session
    return Prompt.ask("[cyan]Amount[/]", default="")


def ask_currency(label: str, choices: Sequence[str], default: str) -> str:
    return Prompt.ask(f"[cyan]{label}[/]", choices=list(choices), default=default)


def ask_action() -> str:
    return Prompt.ask(
        "[bold]Next[/]",
        choices=["convert", "theme", "reload", "quit"],
        default="convert",
    )


def ask_yes_no(question: str, default: bool = True) -> bool:
    return Confirm.ask(f"[bold]{question}[/]", default=default)
