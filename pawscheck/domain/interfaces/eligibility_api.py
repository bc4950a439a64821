"""Interface for the remote airdrop eligibility API."""

import abc
from typing import Optional

from ..models.common import ProxyUrl
from ..models.wallet import EligibilityResult, SignedAttestation


class EligibilityApi(abc.ABC):
    """Abstract Base Class for eligibility checks."""

    @abc.abstractmethod
    async def check_eligibility(
        self, attestation: SignedAttestation, proxy: Optional[ProxyUrl] = None
    ) -> EligibilityResult:
        """Submits a signed attestation and classifies the response.

        HTTP error statuses are returned as ineligible results, never raised.

        Args:
            attestation: Signature and public key of the wallet.
            proxy: Optional proxy URL all traffic must go through.

        Returns:
            The eligibility classification.

        Raises:
            TransportError: If no response was received or the request could not be built.
        """
        pass
