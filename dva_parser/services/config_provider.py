"""Parser configuration lookup by file extension."""

from pathlib import Path

import structlog

from dva_parser.config import Settings, get_settings
from dva_parser.parser.base import ConfigProvider
from dva_parser.parser.models import Dialect, ParserConfig
from dva_parser.patterns import matches_patterns

logger = structlog.get_logger(__name__)

EXTENSION_DIALECTS: dict[str, Dialect] = {
    ".js": Dialect.JAVASCRIPT,
    ".jsx": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".cjs": Dialect.JAVASCRIPT,
    ".ts": Dialect.TYPESCRIPT,
    ".mts": Dialect.TYPESCRIPT,
    ".cts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
}


def detect_dialect(file_path: Path | str) -> Dialect | None:
    """Detect the source dialect from a file path.

    Args:
        file_path: Path to the file.

    Returns:
        The dialect if the extension is known, None otherwise.
    """
    path = Path(file_path) if isinstance(file_path, str) else file_path
    return EXTENSION_DIALECTS.get(path.suffix.lower())


class ExtensionConfigProvider(ConfigProvider):
    """Chooses the parser configuration from the file extension.

    Files with an unknown extension or matching one of the exclude patterns
    get no configuration.

    Attributes:
        settings: Settings holding exclude patterns and error recovery.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def get_config(self, file_path: Path | str) -> ParserConfig | None:
        """Get the parser configuration for a file.

        Args:
            file_path: Path to the source file.

        Returns:
            The parser configuration, or None when the file is not parsed.
        """
        dialect = detect_dialect(file_path)
        if dialect is None:
            return None

        if matches_patterns(str(file_path), self.settings.exclude_patterns):
            logger.debug("File excluded from parsing", file_path=str(file_path))
            return None

        return ParserConfig(dialect=dialect, error_recovery=self.settings.error_recovery)
