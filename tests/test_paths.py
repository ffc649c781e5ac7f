"""Tests for viewkit.paths."""

from __future__ import annotations

import hashlib
import os

from viewkit.paths import (
    PathEntry,
    PathRegistry,
    derive_path_id,
    hash_path_id,
    is_valid_identifier,
    normalize_directory,
)

SEP = os.sep


class TestIdentifierValidation:
    def test_valid(self):
        for value in ("views", "_private", "theme2", "Site_Views"):
            assert is_valid_identifier(value)

    def test_invalid(self):
        for value in ("", "2views", "my-views", "a.b", "a b", "views/"):
            assert not is_valid_identifier(value)

    def test_non_string(self):
        assert not is_valid_identifier(0)
        assert not is_valid_identifier(None)


class TestNormalizeDirectory:
    def test_adds_trailing_separator(self):
        assert normalize_directory("views") == "views" + SEP

    def test_keeps_single_trailing_separator(self):
        assert normalize_directory("views" + SEP) == "views" + SEP

    def test_backslashes_converted(self):
        assert normalize_directory("site\\views") == f"site{SEP}views{SEP}"

    def test_accepts_pathlike(self, tmp_path):
        assert normalize_directory(tmp_path) == str(tmp_path) + SEP


class TestDerivePathId:
    def test_explicit_id_wins(self):
        assert derive_path_id(f"site{SEP}views{SEP}", "main") == "main"

    def test_invalid_id_ignored(self):
        assert derive_path_id(f"site{SEP}views{SEP}", 0) == "site.views"
        assert derive_path_id(f"site{SEP}views{SEP}", "not-valid") == "site.views"

    def test_parent_and_last_folder(self):
        assert derive_path_id(f"{SEP}var{SEP}www{SEP}views{SEP}") == "www.views"

    def test_single_folder(self):
        assert derive_path_id("views" + SEP) == "views"

    def test_current_dir_prefix_ignored(self):
        assert derive_path_id(f".{SEP}views{SEP}") == "views"

    def test_hash_fallback(self):
        path = "my-views" + SEP
        expected = "id" + hashlib.md5(path.encode("utf-8")).hexdigest()
        assert derive_path_id(path) == expected
        assert hash_path_id(path) == expected

    def test_hash_is_stable(self):
        assert derive_path_id("a-b" + SEP) == derive_path_id("a-b" + SEP)
        assert derive_path_id("a-b" + SEP) != derive_path_id("a-c" + SEP)


class TestPathRegistry:
    def test_add_path_returns_id(self):
        reg = PathRegistry()
        assert reg.add_path("views") == "views"
        assert reg.get("views") == "views" + SEP
        assert "views" in reg

    def test_insertion_order(self):
        reg = PathRegistry()
        reg.add_path("b", "second")
        reg.add_path("a", "first")
        assert reg.ids() == ["second", "first"]
        assert reg.directories() == ["b" + SEP, "a" + SEP]
        assert list(reg) == ["b" + SEP, "a" + SEP]

    def test_same_id_overwrites(self):
        reg = PathRegistry()
        reg.add_path("one", "main")
        reg.add_path("two", "main")
        assert len(reg) == 1
        assert reg.get("main") == "two" + SEP

    def test_set_paths_list(self):
        reg = PathRegistry()
        reg.add_path("old")
        reg.set_paths(["site/views", "themes"])
        assert reg.ids() == ["site.views", "themes"]

    def test_set_paths_mapping(self):
        reg = PathRegistry()
        reg.set_paths({"main": "views", "theme": "themes/dark"})
        assert reg.get("main") == "views" + SEP
        assert reg.get("theme") == f"themes{SEP}dark{SEP}"

    def test_set_paths_string(self):
        reg = PathRegistry()
        reg.set_paths("views")
        assert reg.ids() == ["views"]

    def test_constructor_paths(self):
        reg = PathRegistry({"main": "views"})
        assert reg.entries() == [PathEntry(id="main", directory="views" + SEP)]

    def test_unknown_id(self):
        assert PathRegistry().get("nope") is None

    def test_clear(self):
        reg = PathRegistry(["views"])
        reg.clear()
        assert len(reg) == 0
