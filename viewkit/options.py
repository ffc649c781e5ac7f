# viewkit — minimal template rendering engine
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Engine configuration snapshot.

Options may be given as a :class:`ViewOptions` or as a plain mapping::

    {
        "paths": ["views", "themes/default"],  # or "folders"; list, dict or str
        "default_template": "404",              # or "defaultTemplate"; str or callable
        "extension": ["html", "txt"],           # or "extensions"; str or list
        "debug": False,
    }
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from viewkit.resolver import TemplateRef, as_reference

DEFAULT_EXTENSIONS: tuple[str, ...] = ("html",)


def _normalize_extensions(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_EXTENSIONS
    if isinstance(value, str):
        value = [value]
    extensions = tuple(str(ext).lstrip(".") for ext in value if ext)
    return extensions or DEFAULT_EXTENSIONS


def _normalize_paths(value: Any) -> tuple[tuple[Any, str], ...]:
    """Flatten the accepted path shapes into ``(id, path)`` pairs."""
    if value is None:
        return ()
    if isinstance(value, (str, os.PathLike)):
        return ((None, os.fspath(value)),)
    if isinstance(value, Mapping):
        return tuple((key, os.fspath(path)) for key, path in value.items())
    return tuple((None, os.fspath(path)) for path in value)


@dataclass(frozen=True)
class ViewOptions:
    """Immutable engine configuration.

    Attributes:
        paths: ``(id, path)`` pairs in scan order; ``id`` may be ``None``.
        default_template: Reference rendered when a lookup misses.
        extensions: Template file extensions in order of preference.
        debug: Log a warning when a template cannot be found.
    """

    paths: tuple[tuple[Any, str], ...] = ()
    default_template: TemplateRef | None = None
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    debug: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ViewOptions:
        paths = options.get("folders") or options.get("paths")

        default = options.get("default_template", options.get("defaultTemplate"))
        if default is not None and default != "":
            default_template: TemplateRef | None = as_reference(default)
        else:
            default_template = None

        extensions = options.get("extension", options.get("extensions"))

        return cls(
            paths=_normalize_paths(paths),
            default_template=default_template,
            extensions=_normalize_extensions(extensions),
            debug=bool(options.get("debug", False)),
        )

    @classmethod
    def coerce(cls, options: ViewOptions | Mapping[str, Any] | None) -> ViewOptions:
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_mapping(options)
        raise TypeError(
            f"options must be ViewOptions or a mapping, not {type(options).__name__}"
        )
