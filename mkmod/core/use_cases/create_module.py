"""
Create module use case — the whole scaffolding pipeline.

    Resolve → CreateDirs → RenderFiles → WriteFiles → RegisterInParent

A write failure aborts before registration, so a module whose own file
failed is never declared in its parent.  A registration failure does
not roll back the files already written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mkmod.core.errors import ParentNotFoundError
from mkmod.core.models.module import ParentInsertion, ResolvedModule
from mkmod.core.models.template import GeneratedFile
from mkmod.core.services.generators.module_file import generate_module_files
from mkmod.core.services.module_writer import (
    check_destinations,
    create_directories,
    write_files,
)
from mkmod.core.services.parent_registrar import (
    apply_insertion,
    is_registered,
    plan_insertion,
)
from mkmod.core.services.path_resolver import build_spec, resolve_module

logger = logging.getLogger(__name__)


@dataclass
class CreateModuleResult:
    """Outcome of one ``create_module`` run."""

    module: str = ""
    base_dir: Path | None = None
    dry_run: bool = False
    files: list[GeneratedFile] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    created: list[Path] = field(default_factory=list)
    registered_in: Path | None = None
    declaration: str | None = None
    already_registered: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "dry_run": self.dry_run,
            "files": [f.path for f in self.files],
            "directories": [str(d) for d in self.directories],
            "created": [str(p) for p in self.created],
            "registered_in": str(self.registered_in) if self.registered_in else None,
            "declaration": self.declaration,
            "already_registered": self.already_registered,
            "warnings": self.warnings,
        }


def create_module(
    raw_path: str,
    *,
    directory: bool = False,
    with_test: bool = True,
    register: bool = True,
    force_main: bool = False,
    private: bool = False,
    dry_run: bool = False,
    cwd: Path | None = None,
) -> CreateModuleResult:
    """Create a module and optionally register it with its parent.

    Args:
        raw_path: Slash-separated module path, relative to *cwd*.
        directory: Create ``<leaf>/mod.rs`` instead of ``<leaf>.rs``.
        with_test: Also create the companion test file.
        register: Add a declaration to the parent module file.
        force_main: Register into ``main.rs`` even when ``lib.rs`` exists.
        private: Declare the module without ``pub``.
        dry_run: Resolve and render only; touch nothing.
        cwd: Base directory (default: process cwd).

    Returns:
        CreateModuleResult. A missing parent shows up in ``warnings``.

    Raises:
        InvalidPathError, NoRootFoundError, AlreadyExistsError, IoFailureError.
    """
    spec = build_spec(
        raw_path,
        directory=directory,
        private=private,
        with_test=with_test,
        force_main=force_main,
    )
    resolved = resolve_module(spec, cwd, register=register)
    files = generate_module_files(resolved)
    check_destinations(resolved)

    result = CreateModuleResult(
        module="/".join(spec.path_segments),
        base_dir=resolved.base_dir,
        dry_run=dry_run,
        files=files,
    )

    if dry_run:
        if register:
            insertion = _plan_registration(resolved, result)
            if insertion is not None:
                try:
                    result.already_registered = is_registered(insertion)
                except ParentNotFoundError as e:
                    result.warnings.append(str(e))
                    result.registered_in = None
        logger.debug("Dry run for %s: %d file(s) planned", result.module, len(files))
        return result

    result.directories = create_directories(resolved)
    result.created = write_files(files)

    if register:
        insertion = _plan_registration(resolved, result)
        if insertion is not None:
            try:
                edited = apply_insertion(insertion)
            except ParentNotFoundError as e:
                result.warnings.append(str(e))
                result.registered_in = None
            else:
                result.already_registered = not edited

    return result


def _plan_registration(
    resolved: ResolvedModule, result: CreateModuleResult
) -> ParentInsertion | None:
    """Fill in the registration target, or record a warning if there is none."""
    try:
        insertion = plan_insertion(resolved)
    except ParentNotFoundError as e:
        logger.debug("Registration skipped: %s", e)
        result.warnings.append(str(e))
        return None

    result.registered_in = insertion.target_file
    result.declaration = insertion.declaration_line
    return insertion
