"""
Error taxonomy for module creation.

Fatal errors abort the run with a non-zero exit code.  ``ParentNotFoundError``
is the one non-fatal case: the use case catches it and downgrades it to a
warning, so module creation still succeeds.
"""

from __future__ import annotations

from pathlib import Path


class MkmodError(Exception):
    """Base class for every error raised while creating a module.

    Attributes:
        path:      The offending path, if one is known.
        exit_code: Process exit code the CLI should use.
        fatal:     Whether the run must stop.
    """

    exit_code: int = 1
    fatal: bool = True

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{message}: {self.path}"
        return message


class InvalidPathError(MkmodError):
    """The module path is empty or contains disallowed characters."""


class AlreadyExistsError(MkmodError):
    """A destination file or directory is already present."""


class IoFailureError(MkmodError):
    """A read, write or create call failed."""


class NoRootFoundError(MkmodError):
    """Registration at the project root was requested but no root file exists."""


class ParentNotFoundError(MkmodError):
    """The parent module file could not be located."""

    exit_code = 0
    fatal = False
