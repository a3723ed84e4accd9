"""File-system source reader."""

import asyncio
from pathlib import Path

import structlog

from dva_parser.parser.base import SourceReader

logger = structlog.get_logger(__name__)


class FileSourceReader(SourceReader):
    """Reads source files from disk without blocking the event loop.

    Attributes:
        encoding: Character encoding of the files.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    async def read(self, file_path: Path | str) -> str:
        """Read a source file in the default executor.

        Args:
            file_path: Path to the file to read.

        Returns:
            The decoded file contents.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file cannot be decoded.
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        def _do_read() -> str:
            return path.read_text(encoding=self.encoding)

        try:
            return await asyncio.get_running_loop().run_in_executor(None, _do_read)
        except UnicodeDecodeError as e:
            logger.warning(f"Failed to decode {path} with {self.encoding}: {e}")
            raise
