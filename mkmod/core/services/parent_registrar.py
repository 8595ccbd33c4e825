"""
Parent registrar — add ``mod <name>;`` to an existing module file.

This is plain text search and insertion, not parsing.  The insertion
point is found by scanning the top of the file:

    1. skip leading blank lines
    2. a run of ``//!`` / ``//`` lines is the header comment
    3. the first run of ``use`` / ``extern crate`` / ``mod x;`` lines
       is the preamble (multi-line ``use`` runs until its ``;``)

The declaration goes after the preamble, else after the header
comment, else at the very top.  Files are rewritten atomically.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from pathlib import Path

from mkmod.core.errors import IoFailureError, ParentNotFoundError
from mkmod.core.models.module import ParentInsertion, ResolvedModule

logger = logging.getLogger(__name__)

_VIS = r"(?:pub(?:\([^)]*\))?\s+)?"
# `//!` and plain `//` lines; `///` documents the next item, not the file
_COMMENT_RE = re.compile(r"^\s*//(?:!|(?!/))")
_PREAMBLE_RE = re.compile(rf"^\s*{_VIS}(?:use\s|extern\s+crate\s|mod\s+\w+\s*;)")


def declaration_line(name: str, public: bool = True) -> str:
    """Format the declaration for module *name*."""
    return f"pub mod {name};" if public else f"mod {name};"


def is_declared(lines: list[str], name: str) -> bool:
    """Whether a declaration for *name* exists, with either visibility."""
    pattern = re.compile(rf"^\s*{_VIS}mod\s+{re.escape(name)}\s*;")
    return any(pattern.match(line) for line in lines)


def _ends_statement(line: str) -> bool:
    code = line.split("//", 1)[0].rstrip()
    return code.endswith(";")


def find_insert_line(lines: list[str]) -> int:
    """Index of the line the declaration should be inserted before.

    A return value equal to ``len(lines)`` means append.
    """
    header_end: int | None = None
    preamble_end: int | None = None
    content_started = False
    body_started = False
    in_statement = False

    for i, line in enumerate(lines):
        if not content_started and not line.strip():
            continue
        content_started = True

        if not body_started:
            if _COMMENT_RE.match(line):
                header_end = i
                continue
            body_started = True

        if in_statement:
            preamble_end = i
            in_statement = not _ends_statement(line)
            continue

        if _PREAMBLE_RE.match(line):
            preamble_end = i
            in_statement = not _ends_statement(line)
            continue

        if preamble_end is not None:
            break

    if preamble_end is not None:
        return preamble_end + 1
    if header_end is not None:
        return header_end + 1
    return 0


def insert_declaration(text: str, name: str, public: bool = True) -> str | None:
    """Return *text* with a declaration for *name* inserted.

    Returns None when *name* is already declared.  Existing line
    endings are kept; a missing final newline is added before appending.
    """
    raw_lines = text.splitlines(keepends=True)
    lines = [line.rstrip("\r\n") for line in raw_lines]
    if is_declared(lines, name):
        return None

    newline = "\r\n" if "\r\n" in text else "\n"
    decl = declaration_line(name, public) + newline

    index = find_insert_line(lines)
    if index >= len(raw_lines):
        if raw_lines and not raw_lines[-1].endswith(("\n", "\r")):
            raw_lines[-1] += newline
        raw_lines.append(decl)
    else:
        raw_lines.insert(index, decl)

    return "".join(raw_lines)


def plan_insertion(resolved: ResolvedModule) -> ParentInsertion:
    """Describe the edit to make in the resolved parent file.

    Raises:
        ParentNotFoundError: no parent module file was located.
    """
    parent = resolved.parent_file
    if parent is None or not parent.is_file():
        missing = parent or resolved.container_dir
        raise ParentNotFoundError("parent module not found, skipping registration", missing)

    return ParentInsertion(
        target_file=parent,
        declaration_line=declaration_line(resolved.spec.leaf, resolved.spec.is_public),
    )


def apply_insertion(insertion: ParentInsertion) -> bool:
    """Insert the declaration into its target file.

    Returns:
        True if the file was edited, False if the module was already declared.

    Raises:
        ParentNotFoundError: the target file vanished.
        IoFailureError: the file could not be read or rewritten.
    """
    path = insertion.target_file
    name = _declared_name(insertion.declaration_line)
    public = insertion.declaration_line.startswith("pub ")

    updated = insert_declaration(_read_parent(path), name, public)
    if updated is None:
        logger.info("Module '%s' already declared in %s", name, path)
        return False

    _atomic_write(path, updated)
    logger.info("Added '%s' to %s", insertion.declaration_line, path)
    return True


def is_registered(insertion: ParentInsertion) -> bool:
    """Whether the target file already declares the module. Read-only.

    Raises:
        ParentNotFoundError, IoFailureError: as for ``apply_insertion``.
    """
    text = _read_parent(insertion.target_file)
    lines = [line.rstrip("\r\n") for line in text.splitlines()]
    return is_declared(lines, _declared_name(insertion.declaration_line))


def _declared_name(line: str) -> str:
    return line.rstrip(";").split()[-1]


def _read_parent(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except FileNotFoundError as e:
        raise ParentNotFoundError("parent module not found, skipping registration", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailureError(f"cannot read parent module ({e})", path) from e


def _atomic_write(path: Path, content: str) -> None:
    """Write *content* to a temp file beside *path*, then swap it in."""
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".mkmod_", suffix=".tmp")
        tmp = Path(tmp_name)
        try:
            with open(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            shutil.copymode(path, tmp)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise IoFailureError(f"cannot rewrite parent module ({e.strerror})", path) from e
