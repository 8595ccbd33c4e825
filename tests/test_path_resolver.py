"""
Tests for the path resolver — parsing module paths and locating parents.

Pure unit tests: module path + flags in → ResolvedModule out.
"""

from pathlib import Path

import pytest

from mkmod.core.errors import InvalidPathError, NoRootFoundError
from mkmod.core.models import ModuleKind, ModuleSpec, TargetRoot, Visibility
from mkmod.core.services.path_resolver import (
    build_spec,
    find_nested_parent,
    find_root_file,
    parse_module_path,
    resolve_module,
)


# ═══════════════════════════════════════════════════════════════════
#  parse_module_path
# ═══════════════════════════════════════════════════════════════════


class TestParseModulePath:
    def test_single_segment(self):
        assert parse_module_path("my_mod") == ("my_mod",)

    def test_nested(self):
        assert parse_module_path("path/to/my_mod") == ("path", "to", "my_mod")

    def test_trailing_extension_dropped(self):
        assert parse_module_path("a/my_mod.rs") == ("a", "my_mod")

    def test_trailing_slash_dropped(self):
        assert parse_module_path("my_mod/") == ("my_mod",)

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty(self, raw):
        with pytest.raises(InvalidPathError):
            parse_module_path(raw)

    @pytest.mark.parametrize(
        "raw",
        ["/abs/mod", "a//b", "../escape", "a/./b", "bad-name", "has space", "a\\b", "x.txt"],
    )
    def test_rejected(self, raw):
        with pytest.raises(InvalidPathError):
            parse_module_path(raw)

    def test_error_names_path(self):
        with pytest.raises(InvalidPathError) as exc:
            parse_module_path("ok/bad-name")
        assert "ok/bad-name" in str(exc.value)


class TestBuildSpec:
    def test_defaults(self):
        spec = build_spec("foo")
        assert spec.kind == ModuleKind.FILE
        assert spec.visibility == Visibility.PUBLIC
        assert spec.has_test is True
        assert spec.target_root == TargetRoot.LIB
        assert spec.leaf == "foo"
        assert spec.parents == ()

    def test_flags(self):
        spec = build_spec("a/foo", directory=True, private=True, with_test=False, force_main=True)
        assert spec.is_directory
        assert not spec.is_public
        assert spec.has_test is False
        assert spec.target_root == TargetRoot.MAIN
        assert spec.parents == ("a",)

    def test_spec_is_frozen(self):
        spec = build_spec("foo")
        with pytest.raises(Exception):
            spec.has_test = False

    def test_empty_segments_rejected(self):
        with pytest.raises(ValueError):
            ModuleSpec(path_segments=())


# ═══════════════════════════════════════════════════════════════════
#  root / parent lookup
# ═══════════════════════════════════════════════════════════════════


class TestFindRootFile:
    def test_prefers_lib(self, src_dir: Path):
        (src_dir / "lib.rs").write_text("")
        (src_dir / "main.rs").write_text("")
        assert find_root_file(src_dir, TargetRoot.LIB) == src_dir / "lib.rs"

    def test_falls_back_to_main(self, src_dir: Path):
        (src_dir / "main.rs").write_text("")
        assert find_root_file(src_dir, TargetRoot.LIB) == src_dir / "main.rs"

    def test_force_main_ignores_lib(self, src_dir: Path):
        (src_dir / "lib.rs").write_text("")
        (src_dir / "main.rs").write_text("")
        assert find_root_file(src_dir, TargetRoot.MAIN) == src_dir / "main.rs"

    def test_force_main_without_main(self, src_dir: Path):
        (src_dir / "lib.rs").write_text("")
        with pytest.raises(NoRootFoundError):
            find_root_file(src_dir, TargetRoot.MAIN)

    def test_no_root(self, src_dir: Path):
        with pytest.raises(NoRootFoundError):
            find_root_file(src_dir, TargetRoot.LIB)


class TestFindNestedParent:
    def test_mod_rs(self, src_dir: Path):
        (src_dir / "util").mkdir()
        (src_dir / "util" / "mod.rs").write_text("")
        assert find_nested_parent(src_dir / "util") == src_dir / "util" / "mod.rs"

    def test_sibling_file(self, src_dir: Path):
        (src_dir / "util.rs").write_text("")
        assert find_nested_parent(src_dir / "util") == src_dir / "util.rs"

    def test_missing(self, src_dir: Path):
        assert find_nested_parent(src_dir / "util") is None


# ═══════════════════════════════════════════════════════════════════
#  resolve_module
# ═══════════════════════════════════════════════════════════════════


class TestResolveModule:
    def test_file_module(self, lib_src: Path):
        resolved = resolve_module(build_spec("foo"), lib_src)
        assert resolved.module_file == lib_src / "foo.rs"
        assert resolved.test_file == lib_src / "foo_test.rs"
        assert resolved.module_dir is None
        assert resolved.parent_file == lib_src / "lib.rs"
        assert resolved.at_root is True

    def test_directory_module(self, lib_src: Path):
        resolved = resolve_module(build_spec("foo", directory=True), lib_src)
        assert resolved.module_dir == lib_src / "foo"
        assert resolved.module_file == lib_src / "foo" / "mod.rs"
        assert resolved.test_file == lib_src / "foo" / "mod_test.rs"

    def test_without_test(self, lib_src: Path):
        resolved = resolve_module(build_spec("foo", with_test=False), lib_src)
        assert resolved.test_file is None
        assert resolved.files == [lib_src / "foo.rs"]

    def test_defaults_to_cwd(self, lib_src: Path):
        resolved = resolve_module(build_spec("foo"))
        assert resolved.base_dir == lib_src
        assert resolved.module_file == lib_src / "foo.rs"

    def test_nested_parent(self, src_dir: Path):
        (src_dir / "a").mkdir()
        (src_dir / "a" / "mod.rs").write_text("")
        resolved = resolve_module(build_spec("a/foo"), src_dir)
        assert resolved.container_dir == src_dir / "a"
        assert resolved.module_file == src_dir / "a" / "foo.rs"
        assert resolved.parent_file == src_dir / "a" / "mod.rs"
        assert resolved.at_root is False

    def test_nested_missing_parent_is_not_an_error(self, src_dir: Path):
        resolved = resolve_module(build_spec("x/y/foo"), src_dir)
        assert resolved.parent_file is None
        assert resolved.module_file == src_dir / "x" / "y" / "foo.rs"

    def test_root_without_root_file(self, src_dir: Path):
        with pytest.raises(NoRootFoundError):
            resolve_module(build_spec("foo"), src_dir)

    def test_no_register_skips_lookup(self, src_dir: Path):
        resolved = resolve_module(build_spec("foo"), src_dir, register=False)
        assert resolved.parent_file is None

    def test_manifest_marks_source_root(self, crate_dir: Path):
        """`mkmod src/foo` from the crate directory registers in src/lib.rs."""
        (crate_dir / "src" / "lib.rs").write_text("")
        resolved = resolve_module(build_spec("src/foo"), crate_dir)
        assert resolved.at_root is True
        assert resolved.parent_file == crate_dir / "src" / "lib.rs"

    def test_dir_beside_manifest_without_root_file_is_nested(self, crate_dir: Path):
        """tests/, examples/ etc. next to Cargo.toml are not source roots."""
        (crate_dir / "src" / "lib.rs").write_text("")
        (crate_dir / "tests").mkdir()
        resolved = resolve_module(build_spec("tests/helpers"), crate_dir)
        assert resolved.at_root is False
        assert resolved.parent_file is None
        assert resolved.module_file == crate_dir / "tests" / "helpers.rs"

    def test_resolver_creates_nothing(self, src_dir: Path):
        resolve_module(build_spec("x/y/foo", directory=True), src_dir)
        assert not (src_dir / "x").exists()
