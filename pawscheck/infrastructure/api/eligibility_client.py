"""Concrete implementation of the EligibilityApi interface for the Paws API.

Builds the browser-like request, optionally routes it through a proxy,
and translates HTTP responses into EligibilityResult values. Only a
missing response (network error, timeout) or a request that cannot be
built is raised, as TransportError, so the RetryExecutor retries it;
HTTP error statuses are returned as ineligible results.
"""

import logging
from email.utils import formatdate
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from pawscheck.domain.exceptions import TransportError
from pawscheck.domain.interfaces.eligibility_api import EligibilityApi
from pawscheck.domain.models.common import ProxyUrl
from pawscheck.domain.models.wallet import Amount, EligibilityResult, SignedAttestation
from pawscheck.infrastructure.config.settings import AppConfig

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 30.0
NO_ALLOCATION_ERROR = "No OG drop"
PAWS_ORIGIN = "https://paws.community"

ClientFactory = Callable[[Optional[ProxyUrl], Dict[str, str]], httpx.AsyncClient]


def create_http_client(proxy: Optional[ProxyUrl], headers: Dict[str, str]) -> httpx.AsyncClient:
    """Default client factory. With a proxy, every request goes through it.

    HTTP_PROXY and friends are ignored: a wallet without a proxy connects directly.
    """
    if proxy:
        logger.debug(f"Using proxy: {proxy}")
    return httpx.AsyncClient(
        headers=headers,
        timeout=REQUEST_TIMEOUT_S,
        proxy=proxy or None,
        follow_redirects=True,
        trust_env=False,
    )


class EligibilityClient(EligibilityApi):
    """HTTP client for the Paws OG eligibility endpoint."""

    def __init__(self, config: AppConfig, client_factory: Optional[ClientFactory] = None):
        """Initializes the client.

        Args:
            config: Application configuration (endpoint, message, user agent).
            client_factory: Builds the httpx.AsyncClient for a request. Tests
                inject one backed by httpx.MockTransport.
        """
        self.api_endpoint = config.api_endpoint
        self.signature_message = config.signature_message
        self.user_agent = config.user_agent
        self._client_factory = client_factory or create_http_client
        logger.debug(f"EligibilityClient initialized for endpoint: {self.api_endpoint}")

    def build_headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "accept-encoding": "gzip, deflate, br",
            "accept-language": "en-US,en;q=0.7",
            "content-type": "application/json",
            "local-date": formatdate(usegmt=True),
            "origin": PAWS_ORIGIN,
            "priority": "u=1, i",
            "referer": f"{PAWS_ORIGIN}/",
            "sec-ch-ua": '"Chromium";v="134", "Not:A-Brand";v="24", "Brave";v="134"',
            "sec-ch-ua-mobile": "?0",
            "sec-ch-ua-platform": '"Windows"',
            "sec-fetch-dest": "empty",
            "sec-fetch-mode": "cors",
            "sec-fetch-site": "same-site",
            "sec-gpc": "1",
            "secure-check": "paws",
            "user-agent": self.user_agent,
        }

    def build_payload(self, attestation: SignedAttestation) -> Dict[str, str]:
        return {
            "signature": attestation.signature,
            "publicKey": attestation.public_key,
            "token": self.signature_message,
            "authToken": "",
        }

    async def check_eligibility(
        self, attestation: SignedAttestation, proxy: Optional[ProxyUrl] = None
    ) -> EligibilityResult:
        wallet = attestation.public_key
        log_extra = {"wallet": wallet}
        payload = self.build_payload(attestation)

        try:
            client = self._client_factory(proxy, self.build_headers())
        except (ValueError, TypeError, httpx.InvalidURL) as e:
            logger.error(f"Request error: {e}", extra=log_extra)
            raise TransportError(f"Request error: {e}") from e

        logger.debug("Checking eligibility...", extra=log_extra)
        try:
            async with client:
                response = await client.post(self.api_endpoint, json=payload)
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            # Subclasses of httpx.TransportError, but the request itself is malformed
            reason = str(e) or type(e).__name__
            logger.error(f"Request error: {reason}", extra=log_extra)
            raise TransportError(f"Request error: {reason}") from e
        except httpx.TransportError as e:
            # Timeouts, connection and proxy failures: no response received
            reason = str(e) or type(e).__name__
            logger.error(f"No response from API: {reason}", extra=log_extra)
            raise TransportError(f"No response from API: {reason}") from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            reason = str(e) or type(e).__name__
            logger.error(f"Request error: {reason}", extra=log_extra)
            raise TransportError(f"Request error: {reason}") from e

        return self.classify_response(response, wallet)

    def classify_response(self, response: httpx.Response, wallet: Optional[str] = None) -> EligibilityResult:
        """Maps an HTTP response onto an EligibilityResult."""
        body = _parse_body(response)
        status = response.status_code

        if response.is_success:
            if body.get("success"):
                return EligibilityResult(eligible=True, amount=_parse_amount(body.get("data")), error=None)
            return EligibilityResult(eligible=False, amount=0, error=body.get("error") or "Unknown error")

        if status == 400 and body.get("error") == NO_ALLOCATION_ERROR:
            # Not an error, the wallet simply has no allocation
            return EligibilityResult(eligible=False, amount=0, error=NO_ALLOCATION_ERROR)

        logger.error(f"API error: {status} - {response.text}", extra={"wallet": wallet} if wallet else None)
        return EligibilityResult(eligible=False, amount=0, error=body.get("error") or f"HTTP error {status}")


def _parse_body(response: httpx.Response) -> Mapping[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}

def _parse_amount(value: Any) -> Amount:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Unexpected amount in API response: {value!r}")
        return 0
    return int(number) if number.is_integer() else number
