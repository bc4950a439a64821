"""Command Handler: Orchestrates one eligibility run.

Loads the wallet and proxy lists, delegates the checks to the BatchRunner,
persists the outcomes with the ResultWriter and reports the summary.
"""

import logging
from typing import List, Optional

from pawscheck.core.services.batch_runner import BatchRunner
from pawscheck.core.services.result_writer import ResultWriter
from pawscheck.domain.interfaces.filesystem import FileSystem
from pawscheck.domain.interfaces.user_interface import UserInterface
from pawscheck.domain.models.common import FilePath, PrivateKey, ProxyUrl
from pawscheck.domain.models.wallet import RunSummary, Wallet
from pawscheck.infrastructure.monitoring.logger_setup import SUCCESS

logger = logging.getLogger(__name__)

DEFAULT_KEYS_FILE = "pk.txt"
DEFAULT_PROXIES_FILE = "proxy.txt"

class CommandHandler:
    """Handles the check command and delegates to the core services."""

    def __init__(
        self,
        batch_runner: BatchRunner,
        result_writer: ResultWriter,
        file_system: FileSystem,
        ui: UserInterface,
        enable_proxy: bool = False,
    ):
        """Initializes the CommandHandler with required services."""
        self.batch_runner = batch_runner
        self.result_writer = result_writer
        self.file_system = file_system
        self.ui = ui
        self.enable_proxy = enable_proxy

    async def load_wallets(self, keys_file: str) -> List[Wallet]:
        keys = await self.file_system.read_lines(FilePath(keys_file))
        logger.info(f"Loaded {len(keys)} private keys")
        return [Wallet(index=i, private_key=PrivateKey(key)) for i, key in enumerate(keys)]

    async def load_proxies(self, proxies_file: str) -> List[ProxyUrl]:
        try:
            proxies = await self.file_system.read_lines(FilePath(proxies_file))
        except OSError as e:
            logger.error(f"Failed to load proxies: {e}")
            return []
        logger.info(f"Loaded {len(proxies)} proxies")
        return [ProxyUrl(p) for p in proxies]

    async def handle_check(
        self, keys_file: str = DEFAULT_KEYS_FILE, proxies_file: str = DEFAULT_PROXIES_FILE
    ) -> Optional[RunSummary]:
        """Runs the eligibility check for every wallet in keys_file.

        Returns:
            The run summary, or None if the run was aborted before any check.
        """
        try:
            wallets = await self.load_wallets(keys_file)
        except OSError as e:
            logger.error(f"Failed to load private keys: {e}")
            self.ui.display_error(f"Failed to load private keys: {e}")
            return None
        if not wallets:
            logger.error(f"No private keys found in {keys_file}")
            self.ui.display_error(f"No private keys found in {keys_file}")
            return None

        proxies: List[ProxyUrl] = []
        if self.enable_proxy:
            proxies = await self.load_proxies(proxies_file)
            proxy_warning = None
            if not proxies:
                proxy_warning = f"Proxy is enabled but no proxies found in {proxies_file}, running without proxies"
            elif len(proxies) < len(wallets):
                proxy_warning = f"Only {len(proxies)} proxies for {len(wallets)} wallets, some wallets will share proxies"
            if proxy_warning:
                logger.warning(proxy_warning)
                self.ui.display_warning(proxy_warning)

        outcomes = await self.batch_runner.run(wallets, proxies)
        await self.result_writer.write(outcomes)

        summary = self.result_writer.summarize(outcomes)
        logger.info(
            f"Summary: total={summary.total} eligible={summary.eligible} "
            f"not_eligible={summary.ineligible} total_tokens={summary.total_amount}"
        )
        self.ui.display_summary(summary)
        logger.log(SUCCESS, "All wallets processed. Bot execution completed.")
        return summary
