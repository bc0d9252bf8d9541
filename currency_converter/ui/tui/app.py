from __future__ import annotations

import asyncio
from typing import List, Optional

from rich.console import Console

from currency_converter.config import Config
from currency_converter.models import LoadState
from currency_converter.session import ConverterSession
from currency_converter.utils.errors import UnknownCurrencyError, ValidationError
from currency_converter.utils.logging import get_logger

from .config import DARK, Theme, toggle
from .display import (
    create_error_panel,
    create_history_table,
    create_result_panel,
    create_welcome_panel,
)
from .input_handler import ask_action, ask_amount, ask_currency, ask_yes_no


logger = get_logger(__name__)


class ConverterTUI:
    """Terminal front end for one conversion session."""

    def __init__(
        self,
        config: Config,
        session: Optional[ConverterSession] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.config = config
        self.session = session or ConverterSession.from_config(config)
        self.console = console or Console()
        self.theme: Theme = DARK
        self.source = config.default_source_currency
        self.target = config.default_target_currency

    def run(self) -> None:
        """Main entry point (sync)."""
        self.console.print(create_welcome_panel(self.theme))

        if not self.load_rates():
            return

        while True:
            try:
                self.convert_once()
                action = ask_action()
                while action in ("theme", "reload"):
                    if action == "theme":
                        self.theme = toggle(self.theme)
                        self.console.print(f"[{self.theme.primary}]Switched to {self.theme.name} mode[/]")
                    else:
                        self.load_rates()
                    action = ask_action()
                if action == "quit":
                    self.console.print(f"\n[bold {self.theme.success}]Goodbye![/]")
                    break
            except KeyboardInterrupt:
                self.console.print("\n[yellow]Interrupted. Goodbye![/]")
                break

    def load_rates(self) -> bool:
        """Fetch rates with a spinner, offering retry until success or the user gives up."""
        while True:
            with self.console.status("Fetching exchange rates..."):
                state = asyncio.run(self.session.load_rates())

            if state == LoadState.READY:
                return True

            error = self.session.last_error
            self.console.print(create_error_panel(f"Could not load exchange rates: {error}", self.theme))
            if not ask_yes_no("Retry?", default=True):
                # A table from an earlier successful load is still usable
                return self.session.store.is_loaded

    def convert_once(self) -> None:
        raw_amount = ask_amount()
        choices = self.available_currencies()
        if not choices:
            self.console.print(create_error_panel("No supported currency has a loaded rate", self.theme))
            return
        self.source = ask_currency("From", choices, self._default_choice(self.source, choices))
        self.target = ask_currency("To", choices, self._default_choice(self.target, choices))

        try:
            self.session.convert(raw_amount, self.source, self.target)
        except (ValidationError, UnknownCurrencyError) as e:
            self.console.print(create_error_panel(str(e), self.theme))
            return

        self.render()

    def available_currencies(self) -> List[str]:
        """Supported codes the loaded rate table can actually price."""
        return [c for c in self.config.supported_currencies if self.session.store.has_currency(c)]

    @staticmethod
    def _default_choice(current: str, choices: List[str]) -> str:
        return current if current in choices else choices[0]

    def render(self) -> None:
        snapshot = self.session.store.snapshot
        self.console.print(
            create_result_panel(
                self.session.latest_result,
                self.target,
                self.session.state,
                self.theme,
                provider_date=snapshot.date if snapshot else None,
            )
        )
        history = self.session.get_history()
        if history:
            self.console.print(create_history_table(history, self.theme))
