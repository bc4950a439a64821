"""Interface for interacting with the file system.

Defines the contract for reading line-oriented input files and writing
result files, allowing the core application to be independent of the
specific file system implementation.
"""

import abc
from typing import List

from ..models.common import FilePath

class FileSystem(abc.ABC):
    """Abstract Base Class for file system operations."""

    @abc.abstractmethod
    async def read_lines(self, file_path: FilePath) -> List[str]:
        """Reads a file and returns its stripped, non-empty lines.

        Args:
            file_path: The path to the file to read.

        Returns:
            The lines of the file. An empty list if the file does not exist.

        Raises:
            OSError: If the file exists but cannot be read or decoded.
        """
        pass

    @abc.abstractmethod
    async def write_file(self, file_path: FilePath, content: str) -> None:
        """Writes content to a file asynchronously, overwriting if it exists.

        Parent directories are created when missing.

        Args:
            file_path: The path to the file to write.
            content: The string content to write.

        Raises:
            OSError: If the directory or the file cannot be written.
        """
        pass

    @abc.abstractmethod
    async def file_exists(self, file_path: FilePath) -> bool:
        """Checks if a file exists asynchronously."""
        pass
