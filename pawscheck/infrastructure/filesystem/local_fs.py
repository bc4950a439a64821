"""Local-disk implementation of the FileSystem interface.

Input lists (pk.txt, proxy.txt) are read line by line with `aiofiles`;
result files are written whole, replacing any previous run.
"""

import asyncio
import logging
from pathlib import Path
from typing import List

import aiofiles

from pawscheck.domain.interfaces.filesystem import FileSystem
from pawscheck.domain.models.common import FilePath

logger = logging.getLogger(__name__)

class LocalFileSystem(FileSystem):
    """Reads wallet and proxy lists and writes result files on the local disk."""

    async def read_lines(self, file_path: FilePath) -> List[str]:
        """Returns the stripped, non-empty lines of a text file.

        A missing file is not an error: it yields an empty list and a warning,
        so an absent proxy.txt simply means "no proxies".

        Raises:
            OSError: If the file exists but cannot be read or decoded.
        """
        path = Path(file_path)
        if not await self.file_exists(file_path):
            logger.warning(f"File not found: {path}")
            return []

        entries: List[str] = []
        try:
            async with aiofiles.open(path, mode='r', encoding='utf-8') as f:
                async for raw_line in f:
                    entry = raw_line.strip()
                    if entry:
                        entries.append(entry)
        except UnicodeDecodeError as e:
            logger.error(f"{path} is not valid UTF-8: {e}")
            raise OSError(f"Failed to decode {file_path}: {e}") from e
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            raise

        logger.debug(f"{path}: {len(entries)} entries")
        return entries

    async def write_file(self, file_path: FilePath, content: str) -> None:
        """Replaces the file's content, creating missing parent directories.

        Raises:
            OSError: If the directory or the file cannot be written.
        """
        path = Path(file_path)
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            async with aiofiles.open(path, mode='w', encoding='utf-8') as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            raise
        logger.debug(f"Wrote {len(content)} characters to {path}")

    async def file_exists(self, file_path: FilePath) -> bool:
        return await asyncio.to_thread(Path(file_path).is_file)
