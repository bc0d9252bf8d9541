"""Rich-based terminal UI for the Currency Converter.

Modules:
- app.py: Interactive loop driving a ConverterSession
- display.py: Rich renderables for panels/tables
- renderer.py: Formatting utilities
- input_handler.py: Prompt helpers
- config.py: Themes and constants
"""

__all__ = [
    "app",
    "display",
    "renderer",
    "input_handler",
    "config",
]
