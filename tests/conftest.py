import json
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import base58
import httpx
import pytest
from solders.keypair import Keypair
from typer.testing import CliRunner

from pawscheck.domain.models.common import DelayRange, RetryPolicy
from pawscheck.infrastructure.api.eligibility_client import EligibilityClient
from pawscheck.infrastructure.config.settings import AppConfig

TEST_ENDPOINT = "https://api.paws.test/api/v1/user/og-check"
TEST_MESSAGE = "Paws OG eligibility check"


class SleepRecorder:
    """Async stand-in for asyncio.sleep that only records the requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_wallet_key(seed_byte: int) -> Tuple[str, str]:
    """Returns (base58 64-byte secret key, base58 public key) for a deterministic keypair."""
    keypair = Keypair.from_seed(bytes([seed_byte]) * 32)
    return base58.b58encode(bytes(keypair)).decode("ascii"), str(keypair.pubkey())


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture
def sleep_recorder():
    return SleepRecorder()

@pytest.fixture
def wallet_keys() -> Dict[str, Tuple[str, str]]:
    """Two deterministic wallets, keyed 'key1' and 'key2'."""
    return {"key1": make_wallet_key(1), "key2": make_wallet_key(2)}

@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        api_endpoint=TEST_ENDPOINT,
        signature_message=TEST_MESSAGE,
        concurrency=2,
        delay=DelayRange(min_ms=0, max_ms=0),
        retry_policy=RetryPolicy(max_retries=2, min_backoff_ms=1, max_backoff_ms=1),
        user_agent="pawscheck-tests/1.0",
    )

@pytest.fixture
def mock_api(mocker):
    """Routes every EligibilityClient built by pawscheck.main through httpx.MockTransport.

    Tests set ``mock_api.handler`` to a callable taking an httpx.Request.
    Every request and the proxy it was built for are recorded.
    """
    class MockApi:
        handler: Callable[[httpx.Request], httpx.Response] = None
        requests: List[httpx.Request] = []
        proxies: List[str] = []

        def factory(self, proxy, headers):
            self.proxies.append(proxy)

            def dispatch(request: httpx.Request) -> httpx.Response:
                self.requests.append(request)
                return self.handler(request)

            return httpx.AsyncClient(transport=httpx.MockTransport(dispatch), headers=headers)

        def requests_for(self, public_key: str) -> List[httpx.Request]:
            return [r for r in self.requests if json.loads(r.content)["publicKey"] == public_key]

    api = MockApi()
    api.requests = []
    api.proxies = []
    mocker.patch(
        "pawscheck.main.EligibilityClient",
        side_effect=lambda config: EligibilityClient(config=config, client_factory=api.factory),
    )
    return api

@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Temporary working directory with a config.json suited to fast runs."""
    config = {
        "enableProxy": False,
        "concurrency": 1,
        "delayBetweenAccounts": {"min": 0, "max": 0},
        "retryOptions": {"retries": 2, "minTimeout": 1, "maxTimeout": 1},
        "apiEndpoint": TEST_ENDPOINT,
        "signatureMessage": TEST_MESSAGE,
        "userAgent": "pawscheck-tests/1.0",
        "logging": {"level": "DEBUG", "file": None},
    }
    (tmp_path / "config.json").write_text(json.dumps(config))
    monkeypatch.chdir(tmp_path)
    for name in ("PAWSCHECK_CONCURRENCY", "PAWSCHECK_ENABLE_PROXY", "PAWSCHECK_API_ENDPOINT", "PAWSCHECK_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
