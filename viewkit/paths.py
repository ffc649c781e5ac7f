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

"""Named template search directories.

Every directory is registered under an identifier so that a template can be
addressed directly with ``"<id>::<name>"`` instead of scanning all paths.
When no usable identifier is given one is derived from the path itself:

* ``"site/views/"``  → ``"site.views"``
* ``"views"``        → ``"views"``
* ``"my-views"``     → ``"id"`` + md5 of the normalised path
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

PATH_ID_PREFIX = "id"

_IDENTIFIER_RE = re.compile(r"[^\W\d]\w*")

PathsInput = str | os.PathLike | Mapping[Any, Any] | list | tuple


@dataclass(frozen=True)
class PathEntry:
    """A registered search directory."""

    id: str
    directory: str  # always ends with os.sep


def is_valid_identifier(value: object) -> bool:
    """Return True if *value* is a letter/underscore followed by word characters."""
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def normalize_directory(path: str | os.PathLike) -> str:
    """Use the platform separator throughout and guarantee a trailing one."""
    path = os.path.expanduser(os.fspath(path))
    path = path.replace("\\", os.sep).replace("/", os.sep)
    if not path.endswith(os.sep):
        path += os.sep
    return path


def hash_path_id(path: str) -> str:
    """Deterministic identifier for paths that cannot name themselves."""
    return PATH_ID_PREFIX + hashlib.md5(path.encode("utf-8")).hexdigest()


def derive_path_id(path: str, id: object = None) -> str:
    """Return *id* if it is a valid identifier, otherwise derive one from *path*.

    *path* is expected to be normalised (see :func:`normalize_directory`).
    """
    if is_valid_identifier(id):
        return id  # type: ignore[return-value]

    folders = [part for part in path.split(os.sep) if part and part != os.curdir]
    if len(folders) >= 2:
        return f"{folders[-2]}.{folders[-1]}"
    if len(folders) == 1 and is_valid_identifier(folders[0]):
        return folders[0]
    if is_valid_identifier(path):
        return path
    return hash_path_id(path)


class PathRegistry:
    """Ordered id → directory mapping used by the template resolver."""

    def __init__(self, paths: PathsInput | None = None) -> None:
        self._paths: dict[str, str] = {}
        if paths is not None:
            self.set_paths(paths)

    def add_path(self, path: str | os.PathLike, id: object = None) -> str:
        """Register *path* and return the identifier it was stored under.

        An existing entry with the same identifier is replaced.
        """
        directory = normalize_directory(path)
        path_id = derive_path_id(directory, id)
        self._paths[path_id] = directory
        logger.debug("Registered template path %s -> %s", path_id, directory)
        return path_id

    def set_paths(self, paths: PathsInput) -> None:
        """Replace all entries.

        Accepts a mapping of id → path, a list/tuple of paths (identifiers
        derived), or a single path.
        """
        self._paths = {}
        if isinstance(paths, (str, os.PathLike)):
            self.add_path(paths)
        elif isinstance(paths, Mapping):
            for path_id, path in paths.items():
                self.add_path(path, path_id)
        else:
            for path in paths:
                self.add_path(path)

    def get(self, path_id: str) -> str | None:
        return self._paths.get(path_id)

    def clear(self) -> None:
        self._paths = {}

    def entries(self) -> list[PathEntry]:
        return [PathEntry(id=k, directory=v) for k, v in self._paths.items()]

    def directories(self) -> list[str]:
        return list(self._paths.values())

    def ids(self) -> list[str]:
        return list(self._paths.keys())

    def __contains__(self, path_id: object) -> bool:
        return path_id in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths.values())

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"PathRegistry({self._paths!r})"
