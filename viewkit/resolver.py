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

"""Template lookup across registered search paths.

Resolution order for ``resolver.find("page")`` with extensions
``["html", "txt"]`` and paths ``[a, b]``:

1. ``a/page.html``, ``b/page.html``
2. ``a/page.txt``,  ``b/page.txt``
3. ``./page.html``, ``./page.txt`` (only if at least one path was searched)
4. the same steps for the configured default template

A reference of the form ``"<id>::page"`` only searches the path registered
under ``<id>``.  Misses are never errors; only a reference of the wrong type
raises :class:`InvalidReferenceError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from viewkit.paths import PathRegistry

logger = logging.getLogger(__name__)

PATH_ID_SEPARATOR = "::"

Reference = str | Callable[[], str]


class InvalidReferenceError(TypeError):
    """A template reference is neither a string nor a zero-argument callable."""


@dataclass(frozen=True)
class LiteralRef:
    """A reference given as a plain string."""

    name: str

    def get(self) -> str:
        return self.name


@dataclass(frozen=True)
class SupplierRef:
    """A reference produced lazily by a zero-argument callable."""

    supplier: Callable[[], str]

    def get(self) -> str:
        name = self.supplier()
        if not isinstance(name, str):
            raise InvalidReferenceError(
                f"Template reference producer returned {type(name).__name__}, "
                "expected str"
            )
        return name


TemplateRef = LiteralRef | SupplierRef


def as_reference(value: object) -> TemplateRef:
    """Wrap a string or zero-argument callable as a :data:`TemplateRef`."""
    if isinstance(value, (LiteralRef, SupplierRef)):
        return value
    if isinstance(value, str):
        return LiteralRef(value)
    if callable(value):
        return SupplierRef(value)
    raise InvalidReferenceError(
        f"Template reference must be str or callable, not {type(value).__name__}"
    )


@dataclass(frozen=True)
class Resolution:
    """Outcome of a lookup.

    Attributes:
        reference: The reference that was originally requested.
        path: Path of the matching file, or ``None`` when nothing matched.
        from_default: True when *path* came from the default template.
    """

    reference: str
    path: str | None = None
    from_default: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None


def _exists(path: str) -> bool:
    return os.path.isfile(path)


class TemplateResolver:
    """Find template files by logical name.

    Args:
        paths: Registry of search directories (shared, not copied).
        extensions: File extensions in order of preference.
        default_template: Reference tried when the requested one misses.
        debug: Log a warning for references that resolve to nothing.
        file_exists: Existence oracle, ``os.path.isfile`` by default.
    """

    def __init__(
        self,
        paths: PathRegistry,
        extensions: Sequence[str] = ("html",),
        default_template: Reference | TemplateRef | None = None,
        debug: bool = False,
        file_exists: Callable[[str], bool] | None = None,
    ) -> None:
        self.paths = paths
        self.extensions = list(extensions)
        self.default_template = (
            as_reference(default_template) if default_template is not None else None
        )
        self.debug = debug
        self._file_exists = file_exists or _exists

    def find(self, reference: Reference) -> str | None:
        """Return the path of the template for *reference*, or ``None``."""
        return self.resolve(reference).path

    def resolve(self, reference: Reference) -> Resolution:
        name = as_reference(reference).get()

        path = self.locate(name)
        if path is not None:
            return Resolution(reference=name, path=path)

        if self.default_template is not None:
            default_name = self.default_template.get()
            path = self.locate(default_name)
            if path is not None:
                logger.debug("Template %r not found, using default %s", name, path)
                return Resolution(reference=name, path=path, from_default=True)

        if self.debug:
            logger.warning("Template not found: %s", name)
        return Resolution(reference=name)

    def locate(self, name: str) -> str | None:
        """Search paths and working directory for *name*, ignoring the default."""
        if not name:
            return None

        if name.find(PATH_ID_SEPARATOR) > 0:
            path_id, name = name.split(PATH_ID_SEPARATOR, 1)
            directory = self.paths.get(path_id)
            directories = [directory] if directory is not None else []
        else:
            directories = self.paths.directories()

        # Extension-major: a preferred extension wins over every path first.
        for ext in self.extensions:
            for directory in directories:
                candidate = f"{directory}{name}.{ext}"
                if self._file_exists(candidate):
                    logger.debug("Resolved template %r -> %s", name, candidate)
                    return candidate

        if directories:
            for ext in self.extensions:
                candidate = os.path.join(os.curdir, f"{name}.{ext}")
                if self._file_exists(candidate):
                    logger.debug("Resolved template %r in working directory", name)
                    return candidate

        return None
