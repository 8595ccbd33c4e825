"""
Path resolver — turn a module path into concrete files on disk.

Given ``path/to/leaf`` and the layout flags, works out:

    file module       <dirs>/<leaf>.rs        + <dirs>/<leaf>_test.rs
    directory module  <dirs>/<leaf>/mod.rs    + <dirs>/<leaf>/mod_test.rs

and, when registration is requested, which existing file should
receive the ``mod <leaf>;`` declaration.  Nothing is created here;
the only filesystem access is existence checks.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from mkmod.core.errors import InvalidPathError, NoRootFoundError
from mkmod.core.models.module import (
    ModuleKind,
    ModuleSpec,
    ResolvedModule,
    TargetRoot,
    Visibility,
)

logger = logging.getLogger(__name__)

MODULE_EXT = "rs"
LIB_ROOT = f"lib.{MODULE_EXT}"
MAIN_ROOT = f"main.{MODULE_EXT}"
DIR_MODULE_STEM = "mod"
TEST_SUFFIX = "_test"

# A directory whose parent holds this manifest is a crate source root
MANIFEST_FILE = "Cargo.toml"

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_]+$")


def parse_module_path(raw: str) -> tuple[str, ...]:
    """Split a slash-separated module path into validated segments.

    A single trailing ``/`` and a trailing ``.rs`` on the leaf are
    tolerated and dropped.

    Raises:
        InvalidPathError: empty path, absolute path, or a segment that is
            empty, ``.``/``..``, or holds characters outside ``[A-Za-z0-9_]``.
    """
    if not raw or not raw.strip():
        raise InvalidPathError("module path is empty")

    if "\\" in raw:
        raise InvalidPathError("module path must use '/' as separator", raw)
    if raw.startswith("/"):
        raise InvalidPathError("module path must be relative", raw)

    text = raw[:-1] if raw.endswith("/") else raw
    segments = text.split("/")

    suffix = f".{MODULE_EXT}"
    if segments[-1].endswith(suffix):
        segments[-1] = segments[-1][: -len(suffix)]

    for seg in segments:
        if seg in ("", ".", ".."):
            raise InvalidPathError(f"invalid path segment {seg!r}", raw)
        if not _SEGMENT_RE.match(seg):
            raise InvalidPathError(f"disallowed characters in segment {seg!r}", raw)

    return tuple(segments)


def build_spec(
    raw_path: str,
    *,
    directory: bool = False,
    private: bool = False,
    with_test: bool = True,
    force_main: bool = False,
) -> ModuleSpec:
    """Build the immutable ``ModuleSpec`` from CLI input."""
    return ModuleSpec(
        path_segments=parse_module_path(raw_path),
        kind=ModuleKind.DIRECTORY if directory else ModuleKind.FILE,
        visibility=Visibility.PRIVATE if private else Visibility.PUBLIC,
        has_test=with_test,
        target_root=TargetRoot.MAIN if force_main else TargetRoot.LIB,
    )


def is_root_dir(container: Path, has_parents: bool) -> bool:
    """Whether modules created in *container* belong to a root module file.

    A module with no intermediate directories lives at the project root.
    A nested container also counts as a root when its own parent holds
    the crate manifest and it holds a root file itself (``mkmod src/foo``
    run from the crate directory).  Other directories beside the manifest,
    such as ``tests/`` or ``examples/``, are ordinary nested containers.
    """
    if not has_parents:
        return True
    if not (container.parent / MANIFEST_FILE).is_file():
        return False
    return any((container / name).is_file() for name in (LIB_ROOT, MAIN_ROOT))


def find_root_file(container: Path, target_root: TargetRoot) -> Path:
    """Pick the root module file in *container*.

    ``lib.rs`` is preferred and ``main.rs`` is the fallback, unless
    *target_root* forces ``main.rs``.

    Raises:
        NoRootFoundError: the chosen root file (or both) is missing.
    """
    main_file = container / MAIN_ROOT
    if target_root == TargetRoot.MAIN:
        if main_file.is_file():
            return main_file
        raise NoRootFoundError(f"no {MAIN_ROOT} found", container)

    lib_file = container / LIB_ROOT
    if lib_file.is_file():
        return lib_file
    if main_file.is_file():
        logger.debug("No %s in %s, falling back to %s", LIB_ROOT, container, MAIN_ROOT)
        return main_file
    raise NoRootFoundError(f"neither {LIB_ROOT} nor {MAIN_ROOT} found", container)


def find_nested_parent(container: Path) -> Path | None:
    """Locate the module file that owns *container*.

    Checks ``<container>/mod.rs`` first, then the sibling
    ``<container>.rs``.  Returns None when neither exists.
    """
    candidates = (
        container / f"{DIR_MODULE_STEM}.{MODULE_EXT}",
        container.parent / f"{container.name}.{MODULE_EXT}",
    )
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def resolve_module(
    spec: ModuleSpec,
    cwd: Path | None = None,
    *,
    register: bool = True,
) -> ResolvedModule:
    """Compute every path needed to create and register *spec*.

    Args:
        spec: The requested module.
        cwd: Directory the module path is relative to (default: cwd).
        register: Whether a parent file should be looked up.

    Returns:
        ResolvedModule. ``parent_file`` is None for a nested module whose
        parent module file does not exist; the registrar reports that as
        a warning.

    Raises:
        NoRootFoundError: registration at the root with no root file.
    """
    base_dir = (cwd or Path.cwd()).resolve()
    container = base_dir.joinpath(*spec.parents)
    leaf = spec.leaf

    if spec.is_directory:
        module_dir: Path | None = container / leaf
        stem = DIR_MODULE_STEM
        file_dir = container / leaf
    else:
        module_dir = None
        stem = leaf
        file_dir = container

    module_file = file_dir / f"{stem}.{MODULE_EXT}"
    test_file = file_dir / f"{stem}{TEST_SUFFIX}.{MODULE_EXT}" if spec.has_test else None

    at_root = is_root_dir(container, bool(spec.parents))
    parent_file: Path | None = None
    if register:
        if at_root:
            parent_file = find_root_file(container, spec.target_root)
        else:
            parent_file = find_nested_parent(container)

    resolved = ResolvedModule(
        spec=spec,
        base_dir=base_dir,
        container_dir=container,
        module_dir=module_dir,
        module_file=module_file,
        test_file=test_file,
        parent_file=parent_file,
        at_root=at_root,
    )
    logger.debug(
        "Resolved %s → %s (parent=%s, root=%s)",
        "/".join(spec.path_segments), module_file, parent_file, at_root,
    )
    return resolved
