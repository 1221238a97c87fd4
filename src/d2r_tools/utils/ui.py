"""
Console output for the command line.

Status panels report the outcome of an apply or a load, titled by the
phase that failed. A missing game folder reads as a loading problem and a
locked file as an apply problem. Plain listings show rune highlight state
and the current configuration.
"""

from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .logger import ConfigurationError, LoadError, LocaleParseError, LocaleReadError

console = Console()

LOAD_ERROR_TITLE = "File loading error"
APPLY_ERROR_TITLE = "Error applying changes"
SUCCESS_TITLE = "Changes saved"
LOADED_TITLE = "Settings loaded"


def error_title(error: BaseException) -> str:
    """Title of the message shown for ``error``, by the phase it belongs to.

    Configuration, read and parse failures happen before anything is
    written, so they are loading errors; everything else is an apply error.
    """
    if isinstance(error, (ConfigurationError, LocaleReadError, LocaleParseError, LoadError)):
        return LOAD_ERROR_TITLE
    return APPLY_ERROR_TITLE


class StatusMessage:
    """Render status panels on the console."""

    @staticmethod
    def info(message: str, title: str = "Info") -> None:
        """Show info message."""
        text = Text(message, style="cyan")
        console.print(Panel(text, title=title, border_style="cyan"))

    @staticmethod
    def success(message: str, title: str = SUCCESS_TITLE) -> None:
        """Show success message."""
        text = Text(f"✅ {message}", style="green")
        console.print(Panel(text, title=title, border_style="green"))

    @staticmethod
    def warning(message: str, title: str = "Warning") -> None:
        """Show warning message."""
        text = Text(f"⚠️  {message}", style="yellow")
        console.print(Panel(text, title=title, border_style="yellow"))

    @staticmethod
    def error(message: str, title: str = APPLY_ERROR_TITLE) -> None:
        """Show error message; ``title`` usually comes from ``error_title``."""
        text = Text(f"❌ {message}", style="red")
        console.print(Panel(text, title=title, border_style="red"))


def show_highlight_states(states: Mapping[str, bool]) -> None:
    """
    List rune highlight states.

    Args:
        states: Rune -> highlighted, in display order
    """
    console.print("\n[bold cyan]Rune highlights[/bold cyan]")
    console.print("─" * 40)
    for rune, highlighted in states.items():
        state = "[green]highlighted[/green]" if highlighted else "[dim]plain[/dim]"
        console.print(f"{rune:<6} {state}")
    console.print("─" * 40 + "\n")


def show_config(values: Mapping[str, Any]) -> None:
    """List config keys and values; unset values are shown dimmed."""
    console.print("\n[bold cyan]Configuration[/bold cyan]")
    console.print("─" * 60)
    for key, value in values.items():
        if value is None:
            console.print(f"{key}: [dim]not set[/dim]")
        else:
            console.print(f"{key}: {escape(str(value))}")
    console.print("─" * 60 + "\n")
