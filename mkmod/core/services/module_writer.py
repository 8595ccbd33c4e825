"""
Module writer — create directories and write generated files.

Files are created exclusively: an existing destination is never
overwritten or merged.  All destinations are checked up front so a
collision is reported before anything is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mkmod.core.errors import AlreadyExistsError, IoFailureError
from mkmod.core.models.module import ResolvedModule
from mkmod.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


def check_destinations(resolved: ResolvedModule) -> None:
    """Fail if any path the writer would create is already present.

    Raises:
        AlreadyExistsError: naming the first conflicting path.
    """
    targets: list[Path] = []
    if resolved.module_dir is not None:
        targets.append(resolved.module_dir)
    targets.extend(resolved.files)

    for target in targets:
        if target.exists():
            raise AlreadyExistsError("a file of that name already exists", target)


def create_directories(resolved: ResolvedModule) -> list[Path]:
    """Create missing intermediate directories and the leaf directory.

    Returns:
        Directories that did not exist before.

    Raises:
        AlreadyExistsError: the leaf directory of a directory module exists.
        IoFailureError: any other OS error.
    """
    created: list[Path] = []
    container = resolved.container_dir

    try:
        if not container.is_dir():
            container.mkdir(parents=True, exist_ok=True)
            created.append(container)
            logger.info("Created directory %s", container)

        if resolved.module_dir is not None:
            resolved.module_dir.mkdir()
            created.append(resolved.module_dir)
            logger.info("Created directory %s", resolved.module_dir)
    except FileExistsError as e:
        raise AlreadyExistsError("a directory of that name already exists", e.filename) from e
    except OSError as e:
        raise IoFailureError(f"cannot create directory ({e.strerror})", e.filename) from e

    return created


def write_generated_file(file: GeneratedFile) -> Path:
    """Write one GeneratedFile, refusing to replace an existing file.

    Raises:
        AlreadyExistsError: the destination exists.
        IoFailureError: any other OS error.
    """
    target = Path(file.path)
    try:
        with target.open("x", encoding="utf-8", newline="") as fh:
            fh.write(file.content)
    except FileExistsError as e:
        raise AlreadyExistsError("a file of that name already exists", target) from e
    except OSError as e:
        raise IoFailureError(f"cannot write file ({e.strerror})", target) from e

    logger.info("Wrote %s (%d bytes)", target, len(file.content))
    return target


def write_files(files: list[GeneratedFile]) -> list[Path]:
    """Write every generated file in order. Stops at the first failure."""
    return [write_generated_file(f) for f in files]
