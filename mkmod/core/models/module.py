"""
Module model — what the user asked for and where it lands on disk.

``ModuleSpec`` is built once from CLI input and never changes.
``ResolvedModule`` is the path resolver's answer: every file the writer
will create plus the parent file the registrar will edit.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class ModuleKind(str, Enum):
    """Layout of the new module on disk."""

    FILE = "file"            # <leaf>.rs
    DIRECTORY = "directory"  # <leaf>/mod.rs


class Visibility(str, Enum):
    """Visibility qualifier of the declaration added to the parent."""

    PUBLIC = "public"
    PRIVATE = "private"


class TargetRoot(str, Enum):
    """Root module file preferred when registering at the project root."""

    LIB = "lib"
    MAIN = "main"


class ModuleSpec(BaseModel):
    """The module requested on the command line."""

    model_config = ConfigDict(frozen=True)

    path_segments: tuple[str, ...]
    kind: ModuleKind = ModuleKind.FILE
    visibility: Visibility = Visibility.PUBLIC
    has_test: bool = True
    target_root: TargetRoot = TargetRoot.LIB

    @field_validator("path_segments")
    @classmethod
    def _non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("path_segments must not be empty")
        return value

    @property
    def leaf(self) -> str:
        """Name of the module itself."""
        return self.path_segments[-1]

    @property
    def parents(self) -> tuple[str, ...]:
        """Intermediate directories, relative to the working directory."""
        return self.path_segments[:-1]

    @property
    def is_directory(self) -> bool:
        return self.kind == ModuleKind.DIRECTORY

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC


class ResolvedModule(BaseModel):
    """Concrete filesystem locations for a ``ModuleSpec``.

    ``parent_file`` is ``None`` when registration was not requested or
    when no parent module file exists next to a nested module.
    """

    model_config = ConfigDict(frozen=True)

    spec: ModuleSpec
    base_dir: Path
    container_dir: Path
    module_dir: Path | None = None
    module_file: Path
    test_file: Path | None = None
    parent_file: Path | None = None
    at_root: bool = False

    @property
    def files(self) -> list[Path]:
        """Every file the writer will create, module file first."""
        paths = [self.module_file]
        if self.test_file is not None:
            paths.append(self.test_file)
        return paths


class ParentInsertion(BaseModel):
    """A declaration line to insert into an existing parent module file."""

    model_config = ConfigDict(frozen=True)

    target_file: Path
    declaration_line: str
