"""Main entry point for the pawscheck application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from pawscheck.core.command_handler import CommandHandler, DEFAULT_KEYS_FILE, DEFAULT_PROXIES_FILE
from pawscheck.core.services.batch_runner import BatchRunner
from pawscheck.core.services.result_writer import DEFAULT_OUTPUT_DIR, ResultWriter
from pawscheck.core.services.wallet_checker import WalletChecker

# --- Infrastructure Layer ---
# Config
from pawscheck.domain.exceptions import ConfigurationError
from pawscheck.infrastructure.config.settings import AppConfig, DEFAULT_CONFIG_FILE, load_configuration
# UI
from pawscheck.infrastructure.cli.display import ConsoleDisplay
# FileSystem
from pawscheck.infrastructure.filesystem.local_fs import LocalFileSystem
# Signing & API
from pawscheck.infrastructure.crypto.solana_signer import SolanaSigner
from pawscheck.infrastructure.api.eligibility_client import EligibilityClient
# Resilience
from pawscheck.infrastructure.resilience.api_retry import RetryExecutor
# Monitoring
from pawscheck.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    config: AppConfig,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    ui: Optional[ConsoleDisplay] = None,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one run.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ui or ConsoleDisplay()
    dependencies['file_system'] = LocalFileSystem()
    dependencies['signer'] = SolanaSigner()
    dependencies['eligibility_api'] = EligibilityClient(config=config)
    dependencies['retry_executor'] = RetryExecutor(policy=config.retry_policy)

    dependencies['wallet_checker'] = WalletChecker(
        signer=dependencies['signer'],
        eligibility_api=dependencies['eligibility_api'],
        retry_executor=dependencies['retry_executor'],
        signature_message=config.signature_message,
    )
    dependencies['batch_runner'] = BatchRunner(
        wallet_checker=dependencies['wallet_checker'],
        concurrency=config.concurrency,
        delay=config.delay,
        enable_proxy=config.enable_proxy,
    )
    dependencies['result_writer'] = ResultWriter(
        file_system=dependencies['file_system'],
        output_dir=output_dir,
    )
    dependencies['command_handler'] = CommandHandler(
        batch_runner=dependencies['batch_runner'],
        result_writer=dependencies['result_writer'],
        file_system=dependencies['file_system'],
        ui=dependencies['ui'],
        enable_proxy=config.enable_proxy,
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies

# --- Typer App Definition ---
app = typer.Typer(
    name="pawscheck",
    help="Paws OG airdrop eligibility checker: signs a message with every wallet in pk.txt and sorts them into result/eligible.txt and result/noteligible.txt.",
    add_completion=False,
)

@app.command()
def check(
    config_file: Annotated[Path, typer.Option("--config", "-c", help="Path to config.json (or a YAML file).")] = DEFAULT_CONFIG_FILE,
    keys_file: Annotated[Path, typer.Option("--keys", "-k", help="File with one base58 private key per line.")] = Path(DEFAULT_KEYS_FILE),
    proxies_file: Annotated[Path, typer.Option("--proxies", "-p", help="File with one proxy URL per line.")] = Path(DEFAULT_PROXIES_FILE),
    output_dir: Annotated[Path, typer.Option("--output-dir", "-o", help="Directory for eligible.txt and noteligible.txt.")] = Path(DEFAULT_OUTPUT_DIR),
):
    """Check airdrop eligibility for every wallet in the key file."""
    ui = ConsoleDisplay()
    ui.display_banner()

    try:
        config = load_configuration(config_file)
    except ConfigurationError as e:
        setup_logging(console=ui.console)
        logger.error(f"Failed to load configuration: {e}")
        ui.display_error(f"Configuration error: {e}")
        raise typer.Exit(code=1)

    log_level = getattr(logging, config.log_settings.level, logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    setup_logging(log_level=log_level, log_file=config.log_settings.file, console=ui.console)
    logger.info("Configuration loaded")

    handler: CommandHandler = create_dependencies(config, output_dir=str(output_dir), ui=ui)['command_handler']
    try:
        summary = asyncio.run(handler.handle_check(str(keys_file), str(proxies_file)))
    except Exception as e:
        logger.error(f"Main process error: {e}", exc_info=True)
        ui.display_error(f"Run failed: {e}")
        raise typer.Exit(code=1)
    if summary is None:
        raise typer.Exit(code=1)

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
