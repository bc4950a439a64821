"""Centralized logging configuration for the pawscheck application.

Sets up standard Python logging with a colored rich console handler and a
rotating plain-text file handler. Log calls may pass
``extra={"wallet": <address>}``; the address is rendered masked.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = '[%(asctime)s%(wallet_tag)s] %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%d/%m/%Y - %H:%M:%S'
CONSOLE_LOG_FORMAT = '%(wallet_tag)s%(message)s'
MAX_LOG_BYTES = 20 * 1024 * 1024
LOG_BACKUP_COUNT = 7


def mask_wallet(wallet: str) -> str:
    """Shows only the first and last 4 characters of a wallet address."""
    if len(wallet) > 8:
        return f"{wallet[:4]}...{wallet[-4:]}"
    return wallet


class WalletContextFilter(logging.Filter):
    """Adds a ``wallet_tag`` attribute built from the optional ``wallet`` extra."""

    def __init__(self, separator: str = " - ", suffix: str = ""):
        super().__init__()
        self.separator = separator
        self.suffix = suffix

    def filter(self, record: logging.LogRecord) -> bool:
        wallet = getattr(record, "wallet", None)
        if wallet:
            record.wallet_tag = f"{self.separator}{mask_wallet(str(wallet))}{self.suffix}"
        else:
            record.wallet_tag = ""
        return True


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Configures the root logger for the application.

    Args:
        log_level: The minimum logging level (e.g., logging.DEBUG, logging.INFO).
        log_format: The format string for file log messages.
        log_file: Optional path to a rotating log file.
        console: Optional rich Console to log to (defaults to stdout).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers attached to the root logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console handler: rich takes care of level colors and timestamps
    console_handler = RichHandler(
        console=console or Console(file=sys.stdout),
        show_path=False,
        log_time_format=DEFAULT_DATE_FORMAT,
    )
    console_handler.setLevel(log_level)
    console_handler.addFilter(WalletContextFilter(separator="[", suffix="] "))
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.addFilter(WalletContextFilter())
            file_handler.setFormatter(logging.Formatter(log_format, datefmt=DEFAULT_DATE_FORMAT))
            root_logger.addHandler(file_handler)
            logging.debug(f"Logging to file: {log_file}")
        except OSError as e:
            logging.error(f"Failed to set up file logging to {log_file}: {e}", exc_info=True)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
    logging.debug(f"Logging configured. Level={logging.getLevelName(log_level)}")
