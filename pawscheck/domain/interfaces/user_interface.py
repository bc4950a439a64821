"""Interface for interacting with the user.

Defines the contract for displaying the banner, progress messages and the
final summary, allowing different UI implementations.
"""

import abc
from typing import Any

from pawscheck.domain.models.wallet import RunSummary

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_banner(self) -> None:
        """Displays the application header at start-up."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_summary(self, summary: RunSummary) -> None:
        """Displays the aggregate counts of a finished run.

        Args:
            summary: Totals computed from every wallet outcome.
        """
        pass
