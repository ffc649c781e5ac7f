"""Tests for viewkit.options."""

from __future__ import annotations

from pathlib import Path

import pytest

from viewkit.options import DEFAULT_EXTENSIONS, ViewOptions
from viewkit.resolver import InvalidReferenceError, LiteralRef, SupplierRef


class TestFromMapping:
    def test_defaults(self):
        opts = ViewOptions.from_mapping({})
        assert opts.paths == ()
        assert opts.default_template is None
        assert opts.extensions == DEFAULT_EXTENSIONS
        assert opts.debug is False

    def test_paths_list(self):
        opts = ViewOptions.from_mapping({"paths": ["views", Path("themes")]})
        assert opts.paths == ((None, "views"), (None, "themes"))

    def test_paths_mapping(self):
        opts = ViewOptions.from_mapping({"paths": {"main": "views"}})
        assert opts.paths == (("main", "views"),)

    def test_single_path(self):
        assert ViewOptions.from_mapping({"paths": "views"}).paths == ((None, "views"),)

    def test_folders_preferred(self):
        opts = ViewOptions.from_mapping({"folders": ["a"], "paths": ["b"]})
        assert opts.paths == ((None, "a"),)

    def test_single_extension(self):
        assert ViewOptions.from_mapping({"extension": "txt"}).extensions == ("txt",)

    def test_extension_list_normalised(self):
        opts = ViewOptions.from_mapping({"extensions": [".html", "txt"]})
        assert opts.extensions == ("html", "txt")

    def test_default_template_spellings(self):
        assert ViewOptions.from_mapping({"default_template": "404"}).default_template == LiteralRef("404")
        assert ViewOptions.from_mapping({"defaultTemplate": "404"}).default_template == LiteralRef("404")

    def test_default_template_producer(self):
        opts = ViewOptions.from_mapping({"default_template": lambda: "404"})
        assert isinstance(opts.default_template, SupplierRef)

    def test_empty_default_ignored(self):
        assert ViewOptions.from_mapping({"default_template": ""}).default_template is None

    def test_invalid_default(self):
        with pytest.raises(InvalidReferenceError):
            ViewOptions.from_mapping({"default_template": 404})

    def test_debug(self):
        assert ViewOptions.from_mapping({"debug": True}).debug is True


class TestCoerce:
    def test_none(self):
        assert ViewOptions.coerce(None) == ViewOptions()

    def test_passthrough(self):
        opts = ViewOptions(debug=True)
        assert ViewOptions.coerce(opts) is opts

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            ViewOptions.coerce(["views"])

    def test_frozen(self):
        opts = ViewOptions()
        with pytest.raises(AttributeError):
            opts.debug = True
