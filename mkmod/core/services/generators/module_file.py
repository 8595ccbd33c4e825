"""
Module file generator — boilerplate for the module and its test file.

The test-inclusion directive and the test skeleton are a fixed
contract: projects rely on the exact text, so change them with care.
"""

from __future__ import annotations

from mkmod.core.models.module import ResolvedModule
from mkmod.core.models.template import GeneratedFile
from mkmod.core.services.path_resolver import DIR_MODULE_STEM, MODULE_EXT, TEST_SUFFIX


_MODULE_HEADER = """\
//! `{name}` module.
"""

_TEST_INCLUDE = """
#[cfg(test)]
#[path = "./{stem}{suffix}.{ext}"]
mod {stem}{suffix};
"""

_TEST_SKELETON = """\
//! Tests for `{name}`.
use super::*;

#[test]
fn it_works() {{
    todo!()
}}
"""


def render_module_file(name: str, stem: str, with_test: bool) -> str:
    """Render the body of a module file.

    Args:
        name: Module name used in the header.
        stem: File stem of the module file (``mod`` for directory modules).
        with_test: Append the conditional test-inclusion directive.
    """
    content = _MODULE_HEADER.format(name=name)
    if with_test:
        content += _TEST_INCLUDE.format(stem=stem, suffix=TEST_SUFFIX, ext=MODULE_EXT)
    return content


def render_test_file(name: str) -> str:
    """Render a minimal test module with one placeholder test."""
    return _TEST_SKELETON.format(name=name)


def generate_module_files(resolved: ResolvedModule) -> list[GeneratedFile]:
    """Render the module file and, if requested, its companion test file.

    Returns:
        One GeneratedFile for the module, plus one for the test file
        when ``has_test`` is set.
    """
    spec = resolved.spec
    stem = DIR_MODULE_STEM if spec.is_directory else spec.leaf
    layout = "directory" if spec.is_directory else "file"

    files = [
        GeneratedFile(
            path=str(resolved.module_file),
            content=render_module_file(spec.leaf, stem, resolved.test_file is not None),
            reason=f"{layout} module '{spec.leaf}'",
        )
    ]

    if resolved.test_file is not None:
        files.append(GeneratedFile(
            path=str(resolved.test_file),
            content=render_test_file(spec.leaf),
            reason=f"tests for module '{spec.leaf}'",
        ))

    return files
