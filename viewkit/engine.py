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

"""Render engine tying paths, resolution, capture and execution together.

A render call resolves the template, executes it with the assigned data
plus the call's own data, and returns what the template wrote.  Missing
templates render as an empty string; only a malformed reference raises.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from viewkit.capture import CaptureResult, CaptureStack, Transform
from viewkit.executors import BaseExecutor, JinjaExecutor
from viewkit.options import ViewOptions
from viewkit.paths import PathRegistry, PathsInput
from viewkit.resolver import Reference, Resolution, TemplateResolver, as_reference
from viewkit.transforms import builtin_transforms

logger = logging.getLogger(__name__)


class RenderEngine:
    """Find, execute and post-process templates.

    Args:
        options: :class:`ViewOptions` or a mapping accepted by
            :meth:`ViewOptions.from_mapping`.
        executor: Template executor, :class:`JinjaExecutor` by default.
        file_exists: Existence oracle handed to the resolver.
    """

    def __init__(
        self,
        options: ViewOptions | Mapping[str, Any] | None = None,
        *,
        executor: BaseExecutor | None = None,
        file_exists: Callable[[str], bool] | None = None,
    ) -> None:
        self.options = ViewOptions.coerce(options)
        self.debug = self.options.debug

        self.paths = PathRegistry()
        for path_id, path in self.options.paths:
            self.paths.add_path(path, path_id)

        self.resolver = TemplateResolver(
            self.paths,
            extensions=self.options.extensions,
            default_template=self.options.default_template,
            debug=self.debug,
            file_exists=file_exists,
        )
        self.executor = executor or JinjaExecutor()

        self._data: dict[str, Any] = {}
        self._blocks: dict[str, Transform] = builtin_transforms()
        self._captures = CaptureStack(self._blocks)
        self._depth = 0

    # --- Data ---

    def assign(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        """Make *key* available to every template rendered by this engine."""
        if isinstance(key, Mapping):
            self._data.update(key)
        else:
            self._data[key] = value

    @property
    def data(self) -> Mapping[str, Any]:
        return MappingProxyType(self._data)

    # --- Paths ---

    def add_path(self, path: str | os.PathLike, id: str | None = None) -> str:
        return self.paths.add_path(path, id)

    def set_paths(self, paths: PathsInput) -> None:
        self.paths.set_paths(paths)

    def find(self, reference: Reference) -> str | None:
        return self.resolver.find(reference)

    def exists(self, reference: Reference) -> bool:
        """True if *reference* itself resolves, without the default template."""
        return self.resolver.locate(as_reference(reference).get()) is not None

    # --- Blocks ---

    @property
    def blocks(self) -> Mapping[str, Transform]:
        return MappingProxyType(self._blocks)

    def add_block(self, name: str, transform: Transform) -> None:
        """Register *transform* for ``block(name)``; replaces an existing one."""
        if not callable(transform):
            raise TypeError(f"Transform for block {name!r} must be callable")
        self._blocks[name] = transform

    def block(self, name: str, payload: Any = None) -> CaptureResult:
        """Start capturing output for block *name* (no-op if unregistered)."""
        return self._captures.open(name, payload)

    def end_block(self) -> CaptureResult:
        """Close the innermost block (no-op if none is open)."""
        return self._captures.close()

    def write(self, text: str) -> None:
        self._captures.write(text)

    # --- Rendering ---

    def render(self, reference: Reference, data: Mapping[str, Any] | None = None) -> str:
        """Render *reference* with the assigned data overlaid by *data*.

        Returns the rendered text for a top-level call.  Called from inside a
        template, the output goes into the current capture context and the
        return value is ``""``.

        Text written at root level outside any render is discarded when a
        top-level render starts.  Blocks still open when a top-level render
        finishes, including ones opened before it, are flushed untransformed
        into the result.
        """
        top_level = self._depth == 0
        if top_level:
            stale = self._captures.take_output()
            if stale:
                logger.debug("Discarded %d characters written outside render", len(stale))

        resolution = self.resolver.resolve(reference)
        if not resolution.found:
            return ""

        scope = {**self._data, **(data or {})}
        watermark = 0 if top_level else self._captures.depth

        self._depth += 1
        try:
            self._execute(resolution, scope)
        except Exception:
            if top_level:
                self._captures.reset()
            raise
        finally:
            self._depth -= 1

        self._captures.drain(watermark)
        return self._captures.take_output() if top_level else ""

    def embed(self, reference: Reference, data: Mapping[str, Any] | None = None) -> str:
        """Render *reference* into the current output; for use inside templates."""
        return self.render(reference, data)

    def _execute(self, resolution: Resolution, scope: dict[str, Any]) -> None:
        logger.debug(
            "Rendering %r from %s%s",
            resolution.reference,
            resolution.path,
            " (default)" if resolution.from_default else "",
        )
        self.executor.execute(resolution.path, scope, self)
