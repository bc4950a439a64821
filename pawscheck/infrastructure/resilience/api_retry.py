"""Service for executing fallible async operations with automatic retries.

Implements randomized exponential backoff: after the n-th failure the
executor sleeps ``min(round(random() * 2**n * min_backoff), max_backoff)``
milliseconds before trying again. Used for keypair derivation, signing and
the eligibility HTTP call.
"""

import asyncio
import logging
import math
import random
from typing import Awaitable, Callable, Optional, TypeVar

from pawscheck.domain.events.wallet_events import RetriesExhausted, RetryScheduled, dispatch_event
from pawscheck.domain.models.common import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


class RetryExecutor:
    """Re-invokes an async operation until it succeeds or the policy is exhausted."""

    def __init__(
        self,
        policy: RetryPolicy,
        rng: Optional[random.Random] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initializes the RetryExecutor.

        Args:
            policy: Default retry policy, used when run_with_retry gets none.
            rng: Random source for backoff jitter. Seed it for reproducible delays.
            sleep: Awaitable sleep taking seconds (asyncio.sleep by default).
        """
        self.policy = policy
        self.rng = rng or random.Random()
        self._sleep = sleep
        logger.debug(
            f"RetryExecutor initialized: max_retries={policy.max_retries}, "
            f"min_backoff={policy.min_backoff_ms}ms, max_backoff={policy.max_backoff_ms}ms"
        )

    def compute_backoff_ms(self, attempt: int, policy: Optional[RetryPolicy] = None) -> int:
        """Backoff in milliseconds after the given (1-based) failed attempt."""
        policy = policy or self.policy
        raw = self.rng.random() * (2 ** attempt) * policy.min_backoff_ms
        # half-up rounding
        return min(int(math.floor(raw + 0.5)), policy.max_backoff_ms)

    async def run_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: Optional[RetryPolicy] = None,
        operation_name: Optional[str] = None,
        wallet: Optional[str] = None,
    ) -> T:
        """Executes an async operation with retries.

        Args:
            operation: Zero-argument callable returning an awaitable.
            policy: Overrides the executor's default policy for this call.
            operation_name: Name used in logs and events (defaults to the callable's name).
            wallet: Optional wallet address for log context.

        Returns:
            The operation's result from the first successful attempt.

        Raises:
            Exception: The last error raised by the operation once retries are exhausted.
        """
        policy = policy or self.policy
        name = operation_name or getattr(operation, "__name__", "operation")
        log_extra = {"wallet": wallet} if wallet else None
        retry_count = 0

        while True:
            try:
                return await operation()
            except Exception as e:
                retry_count += 1
                if retry_count > policy.max_retries:
                    if policy.max_retries > 0:
                        logger.error(f"{name} failed after {retry_count} attempts: {e}", extra=log_extra)
                    dispatch_event(RetriesExhausted(
                        operation=name, attempts=retry_count, error_type=type(e).__name__,
                        error_message=str(e), wallet=wallet,
                    ))
                    raise

                backoff_ms = self.compute_backoff_ms(retry_count, policy)
                logger.warning(
                    f"Retrying {name} in {backoff_ms}ms (attempt {retry_count}/{policy.max_retries}): {e}",
                    extra=log_extra,
                )
                dispatch_event(RetryScheduled(
                    operation=name, attempt_number=retry_count, delay_ms=backoff_ms,
                    error_message=str(e), wallet=wallet,
                ))
                await self._sleep(backoff_ms / 1000)
