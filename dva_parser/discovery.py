"""Model file discovery.

This module finds the JavaScript and TypeScript files under a project
directory that should be scanned for dva models, applying include/exclude
glob patterns and a file size limit.
"""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

import structlog

from dva_parser.config import Settings, get_settings
from dva_parser.patterns import matches_patterns

logger = structlog.get_logger(__name__)


class ModelFileDiscovery:
    """Discovers candidate model files in a directory tree.

    Attributes:
        settings: Settings holding the patterns and size limit.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the ModelFileDiscovery.

        Args:
            settings: Settings. Uses the cached application settings if not
                provided.
        """
        self.settings = settings or get_settings()

    async def discover(self, root_path: str | Path) -> AsyncGenerator[Path, None]:
        """Discover source files under a directory.

        Args:
            root_path: Directory to search.

        Yields:
            Absolute path of each file passing all filters, in sorted order.
        """
        root = Path(root_path) if isinstance(root_path, str) else root_path
        root = root.resolve()

        if not root.exists():
            logger.error(f"Path does not exist: {root}")
            return

        if not root.is_dir():
            logger.error(f"Path is not a directory: {root}")
            return

        logger.info(f"Starting model file discovery in {root}")
        file_count = 0

        for file_path in await self._walk_directory(root):
            relative_str = file_path.relative_to(root).as_posix()

            if not self._should_include(relative_str):
                continue

            try:
                size_kb = file_path.stat().st_size / 1024
            except OSError as e:
                logger.warning(f"Failed to stat file {relative_str}: {e}")
                continue

            if size_kb > self.settings.max_file_size_kb:
                logger.debug(f"Skipping large file: {relative_str} ({size_kb:.1f}KB)")
                continue

            file_count += 1
            yield file_path

        logger.info(f"Model file discovery complete: {file_count} files found")

    async def discover_all(self, root_path: str | Path) -> list[Path]:
        """Discover all source files and return them as a list.

        Args:
            root_path: Directory to search.

        Returns:
            List of discovered file paths.
        """
        return [file_path async for file_path in self.discover(root_path)]

    async def _walk_directory(self, root: Path) -> list[Path]:
        """Walk the directory tree in a thread pool.

        Args:
            root: Root directory to walk.

        Returns:
            Sorted list of all file paths.
        """

        def _do_walk() -> list[Path]:
            return sorted(path for path in root.rglob("*") if path.is_file())

        return await asyncio.get_running_loop().run_in_executor(None, _do_walk)

    def _should_include(self, relative_path: str) -> bool:
        if matches_patterns(relative_path, self.settings.exclude_patterns):
            return False
        return matches_patterns(relative_path, self.settings.include_patterns)
