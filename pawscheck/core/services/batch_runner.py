"""Core service fanning the wallet pipeline out over a list of wallets.

Wallets run under a ConcurrencyGate of ``concurrency`` slots. After each
wallet except the last, the task sleeps a random delay before giving its
slot to the next queued wallet. Proxies are assigned round-robin by input
index.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, Sequence

from pawscheck.core.services.wallet_checker import WalletChecker
from pawscheck.domain.models.common import DelayRange, ProxyUrl, UNKNOWN_PUBLIC_KEY
from pawscheck.domain.models.wallet import EligibilityOutcome, Wallet
from pawscheck.infrastructure.resilience.concurrency_gate import ConcurrencyGate

logger = logging.getLogger(__name__)


def select_proxy(index: int, proxies: Sequence[ProxyUrl], enabled: bool = True) -> Optional[ProxyUrl]:
    """Round-robin proxy for the wallet at ``index``; None when disabled or empty."""
    if not enabled or not proxies:
        return None
    return proxies[index % len(proxies)]


class BatchRunner:
    """Runs every wallet through the WalletChecker with bounded concurrency."""

    def __init__(
        self,
        wallet_checker: WalletChecker,
        concurrency: int,
        delay: DelayRange,
        enable_proxy: bool = False,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initializes the BatchRunner.

        Args:
            wallet_checker: Per-wallet pipeline.
            concurrency: Maximum number of wallets processed at once.
            delay: Inclusive millisecond range for the pause after each wallet.
            enable_proxy: Whether proxies passed to run() are used.
            rng: Random source for the pause. Seed it for reproducible runs.
            sleep: Awaitable sleep taking seconds (asyncio.sleep by default).
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.wallet_checker = wallet_checker
        self.concurrency = concurrency
        self.delay = delay
        self.enable_proxy = enable_proxy
        self.rng = rng or random.Random()
        self._sleep = sleep

    async def random_sleep(self) -> int:
        """Sleeps a uniformly random number of milliseconds within the delay range."""
        sleep_ms = self.rng.randint(self.delay.min_ms, self.delay.max_ms)
        logger.debug(f"Sleeping for {sleep_ms}ms")
        await self._sleep(sleep_ms / 1000)
        return sleep_ms

    async def run(
        self, wallets: Sequence[Wallet], proxies: Sequence[ProxyUrl] = ()
    ) -> List[EligibilityOutcome]:
        """Checks every wallet and returns one outcome per wallet, in completion order."""
        gate = ConcurrencyGate(self.concurrency)
        results: List[EligibilityOutcome] = []
        last_index = len(wallets) - 1

        async def process(position: int, wallet: Wallet) -> None:
            async with gate:
                proxy = select_proxy(wallet.index, proxies, self.enable_proxy)
                try:
                    outcome = await self.wallet_checker.check(wallet, proxy)
                except Exception as e:
                    logger.error(f"Failed to check eligibility: {e}", exc_info=True)
                    outcome = EligibilityOutcome.failed(wallet, str(e) or type(e).__name__, public_key=UNKNOWN_PUBLIC_KEY)
                results.append(outcome)

                if position < last_index:
                    await self.random_sleep()

        logger.info(f"Starting to process {len(wallets)} wallets")
        await asyncio.gather(*(process(position, wallet) for position, wallet in enumerate(wallets)))
        logger.debug(f"Processed {len(results)} wallets (peak concurrency {gate.peak_in_flight})")
        return results
