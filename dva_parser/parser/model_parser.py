"""Model parsing pipeline.

This module provides ``DvaModelParser``, which drives the extraction of dva
models from a source file: read the file, look up its parser configuration,
parse it, locate candidate object literals and extract a model from each.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path

import structlog

from dva_parser.config import Settings, get_settings
from dva_parser.services.reader import FileSourceReader

from .base import ConfigProvider, ParserError, SourceGenerator, SourceParser, SourceReader
from .extractor import ModelExtractor
from .generator import SourceSliceGenerator
from .locator import locate_candidates
from .models import DvaModel, FileModels, ParserConfig, ScanError, ScanResult
from .tree_sitter import TreeSitterSourceParser

logger = structlog.get_logger(__name__)


class DvaModelParser:
    """Extracts dva models from JavaScript and TypeScript files.

    All collaborators are passed in explicitly. Instances hold no state
    between calls, so one parser may serve many files concurrently.

    Attributes:
        config_provider: Supplies the parser configuration for each file.
        reader: Reads file contents.
        source_parser: Parses source text into a tree.
        extractor: Builds models from candidate nodes.
        settings: Settings controlling concurrency.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        reader: SourceReader | None = None,
        source_parser: SourceParser | None = None,
        generator: SourceGenerator | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the DvaModelParser.

        Args:
            config_provider: Supplies the parser configuration for each file.
            reader: File reader. Defaults to a ``FileSourceReader``.
            source_parser: Source parser. Defaults to tree-sitter.
            generator: Source regenerator for reducers and effects.
                Defaults to a ``SourceSliceGenerator``.
            settings: Settings. Defaults to the cached application settings.
        """
        self.settings = settings or get_settings()
        self.config_provider = config_provider
        self.reader = reader or FileSourceReader(encoding=self.settings.encoding)
        self.source_parser = source_parser or TreeSitterSourceParser()
        self.extractor = ModelExtractor(
            generator or SourceSliceGenerator(dedent=self.settings.dedent_code)
        )

    async def parse_file(self, file_path: Path | str) -> list[DvaModel]:
        """Extract the models declared in a file.

        Args:
            file_path: Path to the source file.

        Returns:
            Models in source order. Empty when no configuration applies to
            the file or the file declares no valid model.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            SourceSyntaxError: If the file contains syntax errors.
        """
        path_str = str(file_path)
        source_code = await self.reader.read(file_path)

        config = self.config_provider.get_config(file_path)
        if config is None:
            logger.debug("No parser configuration, skipping", file_path=path_str)
            return []

        models = self.parse_source(source_code, config)

        logger.debug("Parsed model file", file_path=path_str, models=len(models))
        return models

    def parse_source(self, source_code: str, config: ParserConfig) -> list[DvaModel]:
        """Extract the models declared in source text.

        Args:
            source_code: The source code to parse.
            config: Parser configuration for the source.

        Returns:
            Models in source order.

        Raises:
            SourceSyntaxError: If the source contains syntax errors.
        """
        parsed = self.source_parser.parse(source_code, config)
        candidates = locate_candidates(parsed.statements)

        models: list[DvaModel] = []
        for candidate in candidates:
            model = self.extractor.extract(candidate, parsed.source)
            if model is not None:
                models.append(model)
        return models

    async def parse_files(self, file_paths: Sequence[Path | str]) -> ScanResult:
        """Extract models from many files concurrently.

        Each file is processed independently. Files that cannot be read or
        parsed are reported in ``ScanResult.errors`` instead of raising.

        Args:
            file_paths: Paths to the source files.

        Returns:
            ScanResult with per-file models in input order.
        """
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        async def _parse_one(file_path: Path | str) -> list[DvaModel]:
            async with semaphore:
                return await self.parse_file(file_path)

        tasks = [_parse_one(file_path) for file_path in file_paths]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        scan = ScanResult()
        for file_path, result in zip(file_paths, results):
            path_str = str(file_path)
            if isinstance(result, BaseException):
                if not isinstance(result, (OSError, UnicodeDecodeError, ParserError)):
                    raise result
                logger.warning(
                    "Failed to extract models",
                    file_path=path_str,
                    error=str(result),
                )
                scan.errors.append(
                    ScanError(
                        path=path_str,
                        error_type=type(result).__name__,
                        message=str(result),
                    )
                )
                continue
            scan.files.append(FileModels(path=path_str, models=result))

        logger.info(
            "Model scan complete",
            files=len(scan.files),
            models=scan.model_count,
            errors=len(scan.errors),
        )
        return scan
