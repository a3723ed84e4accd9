"""Pydantic models for extracted dva models.

This module defines the data models produced by the model parser: the
validated model record with its reducers and effects, source locations, the
per-file parser configuration and the aggregated result of scanning many
files.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Dialect(str, Enum):
    """Source dialects understood by the parser."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


class ParserConfig(BaseModel):
    """Parser configuration for a single file.

    Attributes:
        dialect: Grammar used to parse the file.
        error_recovery: When True, syntax errors do not abort the file;
            entries containing broken syntax are skipped instead.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dialect: Dialect = Field(..., description="Grammar used to parse the file")
    error_recovery: bool = Field(False, description="Tolerate syntax errors")


class Position(BaseModel):
    """A point in a source file.

    Attributes:
        line: Line number (1-indexed).
        column: Column in UTF-16 code units (0-indexed).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    line: int = Field(..., ge=1, description="Line number (1-indexed)")
    column: int = Field(..., ge=0, description="Column in UTF-16 code units (0-indexed)")


class SourceLocation(BaseModel):
    """Start and end positions of a node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: Position
    end: Position


class MethodInfo(BaseModel):
    """A single reducer or effect entry.

    Attributes:
        code: Source text of the whole entry, key and value together.
        loc: Location of the entry in the original file, if known.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str = Field(..., description="Source text of the entry")
    loc: SourceLocation | None = Field(None, description="Location of the entry")


class DvaModel(BaseModel):
    """A validated dva model declaration.

    A model is only valid with a non-empty namespace and at least one
    reducer or effect.

    Attributes:
        namespace: The model namespace.
        reducers: Reducer entries keyed by method name.
        effects: Effect entries keyed by method name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str = Field(..., min_length=1, description="Model namespace")
    reducers: dict[str, MethodInfo] = Field(default_factory=dict, description="Reducers")
    effects: dict[str, MethodInfo] = Field(default_factory=dict, description="Effects")

    @model_validator(mode="after")
    def _require_methods(self) -> "DvaModel":
        if not self.reducers and not self.effects:
            raise ValueError("a model needs at least one reducer or effect")
        return self

    def actions(self) -> Iterator[str]:
        """Yield the action types handled by this model.

        Yields:
            Action types in the form ``namespace/name``, reducers first.
        """
        for name in self.reducers:
            yield f"{self.namespace}/{name}"
        for name in self.effects:
            yield f"{self.namespace}/{name}"

    def find_method(self, name: str) -> MethodInfo | None:
        """Look up a reducer or effect by name, reducers first."""
        if name in self.reducers:
            return self.reducers[name]
        return self.effects.get(name)


class FileModels(BaseModel):
    """Models extracted from one file."""

    path: str = Field(..., description="Path to the source file")
    models: list[DvaModel] = Field(default_factory=list, description="Extracted models")


class ScanError(BaseModel):
    """A file that could not be read or parsed during a scan."""

    path: str = Field(..., description="Path to the source file")
    error_type: str = Field(..., description="Exception class name")
    message: str = Field(..., description="Error message")


class ScanResult(BaseModel):
    """Result of extracting models from many files.

    Attributes:
        files: Per-file models, in the order the files were given.
        errors: Files that failed to read or parse.
    """

    files: list[FileModels] = Field(default_factory=list, description="Per-file models")
    errors: list[ScanError] = Field(default_factory=list, description="Failed files")

    @property
    def model_count(self) -> int:
        """Total number of models across all files."""
        return sum(len(f.models) for f in self.files)

    def find_action(self, action_type: str) -> tuple[str, MethodInfo] | None:
        """Find the reducer or effect that handles an action type.

        Args:
            action_type: Action type in the form ``namespace/name``.

        Returns:
            Tuple of (file path, method info) for the first match, or None.
        """
        namespace, sep, name = action_type.rpartition("/")
        if not sep or not namespace or not name:
            return None

        for file_models in self.files:
            for model in file_models.models:
                if model.namespace != namespace:
                    continue
                method = model.find_method(name)
                if method is not None:
                    return file_models.path, method
        return None
