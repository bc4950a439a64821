"""Core service running the eligibility pipeline for a single wallet.

Stages: derive keypair -> sign the configured message -> submit to the
eligibility API. Each stage runs through the RetryExecutor and returns a
StageResult, so the pipeline only has to look at ``ok`` to decide whether
to continue or to produce a failed outcome.
"""

import logging
from typing import Any, Optional

from pawscheck.domain.events.wallet_events import WalletChecked, dispatch_event
from pawscheck.domain.exceptions import PawsCheckError
from pawscheck.domain.interfaces.eligibility_api import EligibilityApi
from pawscheck.domain.interfaces.signer import Signer
from pawscheck.domain.models.common import ProxyUrl, RetryPolicy
from pawscheck.domain.models.wallet import (
    EligibilityOutcome, EligibilityResult, SignedAttestation, StageResult, Wallet,
)
from pawscheck.infrastructure.monitoring.logger_setup import SUCCESS
from pawscheck.infrastructure.resilience.api_retry import RetryExecutor

logger = logging.getLogger(__name__)

KEYPAIR_FAILURE = "Failed to create keypair"
SIGNING_FAILURE = "Failed to sign message"


class WalletChecker:
    """Derives, signs and submits one wallet."""

    def __init__(
        self,
        signer: Signer,
        eligibility_api: EligibilityApi,
        retry_executor: RetryExecutor,
        signature_message: str,
        signing_policy: Optional[RetryPolicy] = None,
        api_policy: Optional[RetryPolicy] = None,
    ):
        """Initializes the WalletChecker with its dependencies.

        The signing and API policies default to the executor's own policy.
        """
        self.signer = signer
        self.eligibility_api = eligibility_api
        self.retry_executor = retry_executor
        self.signature_message = signature_message
        self.signing_policy = signing_policy
        self.api_policy = api_policy

    async def derive_keypair(self, wallet: Wallet) -> StageResult[Any]:
        async def operation():
            return self.signer.derive_keypair(wallet.private_key)

        try:
            keypair = await self.retry_executor.run_with_retry(
                operation, self.signing_policy, operation_name="derive_keypair"
            )
        except PawsCheckError as e:
            logger.error(f"{KEYPAIR_FAILURE}: {e}")
            return StageResult.failure(KEYPAIR_FAILURE)
        return StageResult.success(keypair)

    async def sign(self, keypair: Any, wallet_hint: Optional[str] = None) -> StageResult[SignedAttestation]:
        async def operation():
            return self.signer.sign(keypair, self.signature_message)

        try:
            attestation = await self.retry_executor.run_with_retry(
                operation, self.signing_policy, operation_name="sign_message", wallet=wallet_hint
            )
        except PawsCheckError as e:
            logger.error(f"{SIGNING_FAILURE}: {e}", extra={"wallet": wallet_hint})
            return StageResult.failure(SIGNING_FAILURE)
        return StageResult.success(attestation)

    async def submit(
        self, attestation: SignedAttestation, proxy: Optional[ProxyUrl] = None
    ) -> StageResult[EligibilityResult]:
        async def operation():
            return await self.eligibility_api.check_eligibility(attestation, proxy)

        try:
            result = await self.retry_executor.run_with_retry(
                operation, self.api_policy, operation_name="check_eligibility",
                wallet=attestation.public_key,
            )
        except PawsCheckError as e:
            return StageResult.failure(str(e))
        return StageResult.success(result)

    async def check(self, wallet: Wallet, proxy: Optional[ProxyUrl] = None) -> EligibilityOutcome:
        """Runs the full pipeline and always returns an outcome for the wallet."""
        keypair = await self.derive_keypair(wallet)
        if not keypair.ok:
            return self._finish(EligibilityOutcome.failed(wallet, keypair.error))

        public_key = self.signer.public_key_of(keypair.value)
        signed = await self.sign(keypair.value, public_key)
        if not signed.ok:
            return self._finish(EligibilityOutcome.failed(wallet, signed.error, public_key=public_key))

        attestation = signed.value
        submitted = await self.submit(attestation, proxy)
        if not submitted.ok:
            return self._finish(EligibilityOutcome.failed(wallet, submitted.error, public_key=attestation.public_key))

        return self._finish(EligibilityOutcome.from_result(wallet, attestation.public_key, submitted.value))

    def _finish(self, outcome: EligibilityOutcome) -> EligibilityOutcome:
        log_extra = {"wallet": outcome.public_key}
        if outcome.eligible:
            logger.log(SUCCESS, f"Eligible for {outcome.amount} tokens", extra=log_extra)
        else:
            logger.warning(f"Not eligible: {outcome.error or 'Unknown reason'}", extra=log_extra)
        dispatch_event(WalletChecked(
            public_key=outcome.public_key, eligible=outcome.eligible,
            amount=outcome.amount, error=outcome.error,
        ))
        return outcome
