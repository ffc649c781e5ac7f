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

"""Block transform registry.

Transforms post-process the text captured between ``block()`` and
``end_block()``.  They share a uniform calling convention::

    transform(captured_text, payload) -> str

Every :class:`~viewkit.engine.RenderEngine` copies the registry at
construction, so transforms registered here are available to engines
created afterwards.
"""

from __future__ import annotations

import re
from typing import Any

from viewkit.capture import Transform

MINIMIZE = "minimize"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

# Registry: block name -> transform
_REGISTRY: dict[str, Transform] = {}


def minimize(text: str, payload: Any = None) -> str:
    """Strip every line and join them with no separator."""
    return "".join(line.strip() for line in _NEWLINE_RE.split(text))


def register_transform(name: str, transform: Transform) -> None:
    """Register a transform under a block name."""
    if not callable(transform):
        raise TypeError(f"Transform for block {name!r} must be callable")
    _REGISTRY[name] = transform


def get_transform(name: str) -> Transform:
    """Return the transform registered as *name*.

    Raises :class:`ValueError` if no such transform exists.
    """
    _ensure_builtins()
    transform = _REGISTRY.get(name)
    if transform is None:
        raise ValueError(
            f"Unknown transform {name!r}. Available: {sorted(_REGISTRY.keys())}"
        )
    return transform


def transform_names() -> list[str]:
    _ensure_builtins()
    return list(_REGISTRY.keys())


def builtin_transforms() -> dict[str, Transform]:
    """Return a copy of the registry for an engine to own."""
    _ensure_builtins()
    return dict(_REGISTRY)


def _ensure_builtins() -> None:
    if MINIMIZE not in _REGISTRY:
        _REGISTRY[MINIMIZE] = minimize
