import logging
from datetime import datetime
from typing import Any, Optional

from rich.align import Align
from rich.box import HEAVY, ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pawscheck.domain.interfaces.user_interface import UserInterface
from pawscheck.domain.models.wallet import RunSummary

logger = logging.getLogger(__name__)

APP_TITLE = "Paws OG Eligibility Checker"

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self._console = console or Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_banner(self) -> None:
        timestamp = datetime.now().strftime("%d/%m/%Y %H:%M:%S")
        title = Text("PAWS", style="bold magenta", justify="center")
        subtitle = Text(f"{APP_TITLE}\n{timestamp}", style="green", justify="center")
        panel = Panel(
            Align.center(Text.assemble(title, "\n", subtitle)),
            box=HEAVY,
            border_style="blue",
            padding=(1, 4),
        )
        self.console.print(panel)
        self.console.print("")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {info_message}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {warning_message}")

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_summary(self, summary: RunSummary) -> None:
        """Prints the run totals as a small table."""
        try:
            table = Table(title="Summary", show_header=False, box=ROUNDED, border_style="cyan", padding=(0, 1))
            table.add_column("Metric", style="bold white")
            table.add_column("Value", justify="right")
            table.add_row("Total wallets", str(summary.total))
            table.add_row("Eligible wallets", f"[green]{summary.eligible}[/green]")
            table.add_row("Not eligible", f"[yellow]{summary.ineligible}[/yellow]")
            table.add_row("Total tokens", f"[bold green]{summary.total_amount}[/bold green]")
            self.console.print("")
            self.console.print(table)
            self.console.print("")
        except Exception as e:
            # Fallback if Rich formatting fails
            logger.error(f"Error displaying summary table: {e}")
            self.console.print("\n=== Summary ===")
            self.console.print(f"Total wallets: {summary.total}")
            self.console.print(f"Eligible wallets: {summary.eligible}")
            self.console.print(f"Not eligible: {summary.ineligible}")
            self.console.print(f"Total tokens: {summary.total_amount}\n")
