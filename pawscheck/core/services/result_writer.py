"""Core service persisting wallet outcomes to the result files.

eligible.txt holds ``private_key:public_key:amount`` lines and
noteligible.txt holds ``private_key:public_key`` lines. Both files are
overwritten on every run and written empty when they have no entries.
"""

import logging
from pathlib import Path
from typing import List, Sequence

from pawscheck.domain.exceptions import PersistenceError
from pawscheck.domain.interfaces.filesystem import FileSystem
from pawscheck.domain.models.common import FilePath
from pawscheck.domain.models.wallet import EligibilityOutcome, RunSummary
from pawscheck.infrastructure.monitoring.logger_setup import SUCCESS

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "result"
ELIGIBLE_FILE_NAME = "eligible.txt"
NOT_ELIGIBLE_FILE_NAME = "noteligible.txt"


def format_eligible(outcome: EligibilityOutcome) -> str:
    return f"{outcome.private_key}:{outcome.public_key}:{outcome.amount}"

def format_not_eligible(outcome: EligibilityOutcome) -> str:
    return f"{outcome.private_key}:{outcome.public_key}"


class ResultWriter:
    """Partitions outcomes into the eligible and not-eligible result files."""

    def __init__(self, file_system: FileSystem, output_dir: str = DEFAULT_OUTPUT_DIR):
        self.file_system = file_system
        self.output_dir = Path(output_dir)

    @property
    def eligible_path(self) -> FilePath:
        return FilePath(str(self.output_dir / ELIGIBLE_FILE_NAME))

    @property
    def not_eligible_path(self) -> FilePath:
        return FilePath(str(self.output_dir / NOT_ELIGIBLE_FILE_NAME))

    async def write(self, outcomes: Sequence[EligibilityOutcome]) -> bool:
        """Writes both result files. Failures are logged, never raised.

        Returns:
            True if both files were written.
        """
        eligible_lines: List[str] = [format_eligible(o) for o in outcomes if o.eligible]
        not_eligible_lines: List[str] = [format_not_eligible(o) for o in outcomes if not o.eligible]

        try:
            await self._write_lines(self.eligible_path, eligible_lines)
            if eligible_lines:
                logger.log(
                    SUCCESS,
                    f"{len(eligible_lines)} eligible wallets (pk:address:amount format) saved to {self.eligible_path}",
                )
            else:
                logger.info("No eligible wallets found")

            await self._write_lines(self.not_eligible_path, not_eligible_lines)
            if not_eligible_lines:
                logger.info(
                    f"{len(not_eligible_lines)} non-eligible wallets (pk:address format) saved to {self.not_eligible_path}"
                )
            else:
                logger.info("No non-eligible wallets found")
        except PersistenceError as e:
            logger.error(f"Failed to save results: {e}")
            return False
        return True

    async def _write_lines(self, file_path: FilePath, lines: List[str]) -> None:
        try:
            await self.file_system.write_file(file_path, "\n".join(lines))
        except OSError as e:
            raise PersistenceError(f"Could not write {file_path}: {e}") from e

    @staticmethod
    def summarize(outcomes: Sequence[EligibilityOutcome]) -> RunSummary:
        return RunSummary.from_outcomes(outcomes)
