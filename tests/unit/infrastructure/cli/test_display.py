import pytest
from unittest.mock import MagicMock, call

from rich.panel import Panel
from rich.table import Table

from pawscheck.infrastructure.cli.display import ConsoleDisplay
from pawscheck.domain.models.wallet import RunSummary

@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()

@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    display = ConsoleDisplay(console=mock_console)
    return display

@pytest.fixture
def summary():
    return RunSummary(total=3, eligible=2, ineligible=1, total_amount=2500)

def test_display_banner(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that the banner is printed as a Panel."""
    console_display.display_banner()
    first_args, _ = mock_console.print.call_args_list[0]
    assert isinstance(first_args[0], Panel)

def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that display_error calls console.print with error formatting."""
    error_msg = "No private keys found in pk.txt"
    console_display.display_error(error_msg)
    mock_console.print.assert_called_once_with(f"[bold red]Error:[/bold red] {error_msg}")

def test_display_warning(console_display: ConsoleDisplay, mock_console: MagicMock):
    warning_msg = "Only 1 proxies for 3 wallets"
    console_display.display_warning(warning_msg)
    mock_console.print.assert_called_once_with(f"[bold yellow]Warning:[/bold yellow] {warning_msg}")

def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that display_info calls console.print with info formatting."""
    info_msg = "Loaded 3 private keys"
    console_display.display_info(info_msg)
    mock_console.print.assert_called_once_with(f"[blue]Info:[/blue] {info_msg}")

def test_display_summary_prints_table(console_display: ConsoleDisplay, mock_console: MagicMock, summary):
    """Test that the summary is rendered as a rich Table with one row per metric."""
    console_display.display_summary(summary)

    tables = [args[0] for args, _ in mock_console.print.call_args_list if args and isinstance(args[0], Table)]
    assert len(tables) == 1
    assert tables[0].title == "Summary"
    assert tables[0].row_count == 4

def test_display_summary_falls_back_to_plain_text(console_display: ConsoleDisplay, mock_console: MagicMock, summary):
    """Test the plain-text fallback when printing the table fails."""
    def fail_on_table(*args, **kwargs):
        if args and isinstance(args[0], Table):
            raise RuntimeError("terminal too small")

    mock_console.print.side_effect = fail_on_table
    console_display.display_summary(summary)

    mock_console.print.assert_has_calls([
        call("Total wallets: 3"),
        call("Eligible wallets: 2"),
        call("Not eligible: 1"),
        call("Total tokens: 2500\n"),
    ])
