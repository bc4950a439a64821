import asyncio

import pytest
from unittest.mock import MagicMock

from pawscheck.core.services.result_writer import ResultWriter, format_eligible, format_not_eligible
from pawscheck.domain.interfaces.filesystem import FileSystem
from pawscheck.domain.models.common import PublicKey
from pawscheck.domain.models.wallet import EligibilityOutcome, RunSummary
from pawscheck.infrastructure.filesystem.local_fs import LocalFileSystem

OUTCOMES = [
    EligibilityOutcome(public_key=PublicKey("pubA"), eligible=True, private_key="pkA", amount=1500),
    EligibilityOutcome(public_key=PublicKey("pubB"), eligible=False, private_key="pkB", error="No OG drop"),
    EligibilityOutcome(public_key=PublicKey("pubC"), eligible=True, private_key="pkC", amount=2.5),
    EligibilityOutcome(public_key=PublicKey("unknown"), eligible=False, private_key="bad", error="Failed to create keypair"),
]

@pytest.fixture
def writer(tmp_path):
    return ResultWriter(file_system=LocalFileSystem(), output_dir=str(tmp_path / "result"))

def test_line_formats():
    assert format_eligible(OUTCOMES[0]) == "pkA:pubA:1500"
    assert format_not_eligible(OUTCOMES[1]) == "pkB:pubB"

def test_write_partitions_outcomes(writer: ResultWriter, tmp_path):
    assert asyncio.run(writer.write(OUTCOMES)) is True

    result_dir = tmp_path / "result"
    assert (result_dir / "eligible.txt").read_text() == "pkA:pubA:1500\npkC:pubC:2.5"
    assert (result_dir / "noteligible.txt").read_text() == "pkB:pubB\nbad:unknown"

def test_write_with_no_outcomes_creates_empty_files(writer: ResultWriter, tmp_path):
    assert asyncio.run(writer.write([])) is True
    assert (tmp_path / "result" / "eligible.txt").read_text() == ""
    assert (tmp_path / "result" / "noteligible.txt").read_text() == ""

def test_write_overwrites_previous_run(writer: ResultWriter, tmp_path):
    asyncio.run(writer.write(OUTCOMES))
    asyncio.run(writer.write(OUTCOMES[1:2]))
    assert (tmp_path / "result" / "eligible.txt").read_text() == ""
    assert (tmp_path / "result" / "noteligible.txt").read_text() == "pkB:pubB"

def test_write_failure_is_reported_not_raised():
    file_system = MagicMock(spec=FileSystem)
    file_system.write_file.side_effect = PermissionError("read-only")
    writer = ResultWriter(file_system=file_system, output_dir="result")

    assert asyncio.run(writer.write(OUTCOMES)) is False
    # stops after the first file fails
    file_system.write_file.assert_called_once()

def test_paths_use_output_dir():
    writer = ResultWriter(file_system=MagicMock(spec=FileSystem), output_dir="out")
    assert writer.eligible_path.replace("\\", "/") == "out/eligible.txt"
    assert writer.not_eligible_path.replace("\\", "/") == "out/noteligible.txt"

def test_summarize():
    assert ResultWriter.summarize(OUTCOMES) == RunSummary(total=4, eligible=2, ineligible=2, total_amount=1502.5)
    assert ResultWriter.summarize([]) == RunSummary(total=0, eligible=0, ineligible=0, total_amount=0)
