import json
from pathlib import Path

import httpx
from typer.testing import CliRunner

# Import the app instance from main
from pawscheck.main import app

# These fixtures are defined in tests/conftest.py:
# runner: CliRunner
# workdir: Path (temporary cwd holding config.json)
# mock_api: routes EligibilityClient requests through httpx.MockTransport
# wallet_keys: two deterministic (private key, public key) pairs


def write_keys(workdir: Path, *keys: str, name: str = "pk.txt") -> Path:
    path = workdir / name
    path.write_text("\n".join(keys) + "\n")
    return path

def read_result(workdir: Path, name: str, output_dir: str = "result") -> str:
    return (workdir / output_dir / name).read_text()

def eligible_for(amounts):
    """Handler answering by public key; keys missing from ``amounts`` get 'No OG drop'."""
    def handler(request: httpx.Request) -> httpx.Response:
        public_key = json.loads(request.content)["publicKey"]
        if public_key in amounts:
            return httpx.Response(200, json={"success": True, "data": amounts[public_key]})
        return httpx.Response(400, json={"success": False, "error": "No OG drop"})
    return handler


def test_all_wallets_eligible(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    """Test a full run where every wallet has an allocation."""
    (pk1, pub1), (pk2, pub2) = wallet_keys["key1"], wallet_keys["key2"]
    write_keys(workdir, pk1, pk2)
    mock_api.handler = eligible_for({pub1: 1000, pub2: 2000})

    result = runner.invoke(app, [])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert read_result(workdir, "eligible.txt") == f"{pk1}:{pub1}:1000\n{pk2}:{pub2}:2000"
    assert read_result(workdir, "noteligible.txt") == ""
    assert len(mock_api.requests) == 2

def test_mixed_eligibility(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    """Test that 'No OG drop' wallets land in noteligible.txt without retries."""
    (pk1, pub1), (pk2, pub2) = wallet_keys["key1"], wallet_keys["key2"]
    write_keys(workdir, pk1, pk2)
    mock_api.handler = eligible_for({pub1: 1500})

    result = runner.invoke(app, [])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert read_result(workdir, "eligible.txt") == f"{pk1}:{pub1}:1500"
    assert read_result(workdir, "noteligible.txt") == f"{pk2}:{pub2}"
    assert len(mock_api.requests_for(pub2)) == 1

def test_unreachable_api_for_one_wallet(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    """Test that a wallet whose requests keep timing out is retried, then recorded as not eligible."""
    (pk1, pub1), (pk2, pub2) = wallet_keys["key1"], wallet_keys["key2"]
    write_keys(workdir, pk1, pk2)
    answer = eligible_for({pub2: 3000})

    def handler(request: httpx.Request) -> httpx.Response:
        if json.loads(request.content)["publicKey"] == pub1:
            raise httpx.ReadTimeout("timed out", request=request)
        return answer(request)

    mock_api.handler = handler

    result = runner.invoke(app, [])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    # retries=2 in the workdir config
    assert len(mock_api.requests_for(pub1)) == 3
    assert read_result(workdir, "eligible.txt") == f"{pk2}:{pub2}:3000"
    assert read_result(workdir, "noteligible.txt") == f"{pk1}:{pub1}"

def test_invalid_key_is_recorded_as_unknown(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    pk1, pub1 = wallet_keys["key1"]
    write_keys(workdir, "not-a-key", pk1)
    mock_api.handler = eligible_for({pub1: 10})

    result = runner.invoke(app, [])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert read_result(workdir, "eligible.txt") == f"{pk1}:{pub1}:10"
    assert read_result(workdir, "noteligible.txt") == "not-a-key:unknown"
    assert len(mock_api.requests) == 1

def test_empty_key_file_aborts(runner: CliRunner, workdir: Path, mock_api):
    """Test that an empty pk.txt exits with an error and writes no results."""
    (workdir / "pk.txt").write_text("\n\n")

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert not (workdir / "result").exists()
    assert mock_api.requests == []

def test_missing_key_file_aborts(runner: CliRunner, workdir: Path, mock_api):
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert not (workdir / "result").exists()

def test_invalid_config_exits_with_error(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    write_keys(workdir, wallet_keys["key1"][0])
    (workdir / "config.json").write_text(json.dumps({"signatureMessage": "x"}))

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert mock_api.requests == []
    assert not (workdir / "result").exists()

def test_custom_paths(runner: CliRunner, workdir: Path, mock_api, wallet_keys):
    """Test the --keys and --output-dir options."""
    (pk1, pub1), (pk2, pub2) = wallet_keys["key1"], wallet_keys["key2"]
    keys_file = write_keys(workdir, pk2, name="wallets.txt")
    mock_api.handler = eligible_for({pub2: 5})

    result = runner.invoke(app, ["--keys", str(keys_file), "--output-dir", "out"])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert read_result(workdir, "eligible.txt", output_dir="out") == f"{pk2}:{pub2}:5"
    assert not (workdir / "result").exists()

def test_proxies_rotate_by_wallet(runner: CliRunner, workdir: Path, mock_api, wallet_keys, monkeypatch):
    (pk1, pub1), (pk2, pub2) = wallet_keys["key1"], wallet_keys["key2"]
    write_keys(workdir, pk1, pk2, pk1)
    (workdir / "proxy.txt").write_text("http://10.0.0.1:8080\nhttp://10.0.0.2:8080\n")
    monkeypatch.setenv("PAWSCHECK_ENABLE_PROXY", "true")
    mock_api.handler = eligible_for({})

    result = runner.invoke(app, [])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert mock_api.proxies == ["http://10.0.0.1:8080", "http://10.0.0.2:8080", "http://10.0.0.1:8080"]
    assert read_result(workdir, "noteligible.txt") == f"{pk1}:{pub1}\n{pk2}:{pub2}\n{pk1}:{pub1}"
