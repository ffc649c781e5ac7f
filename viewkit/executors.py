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

"""Template executors.

An executor runs a resolved template file and streams its output through
``engine.write``.  The default :class:`JinjaExecutor` renders files with
Jinja2 and adds three statement tags that talk to the engine:

.. code-block:: jinja

    {% capture "minimize" %}
      <p>
        {{ text }}
      </p>
    {% endcapture %}
    {% embed "partials::footer", {"year": 2026} %}

Output is pulled lazily from ``Template.generate()``, so text written before
a ``capture`` tag reaches the outer sink before the frame opens.  Tags used
inside macros, ``{% call %}``, ``{% filter %}`` or ``{% set %}`` blocks run
while Jinja2 buffers that body, so their output order is not preserved.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import BaseLoader, Environment, TemplateNotFound, TemplateRuntimeError, nodes
from jinja2.ext import Extension

if TYPE_CHECKING:
    from viewkit.engine import RenderEngine

logger = logging.getLogger(__name__)


class BaseExecutor(ABC):
    """Runs a template file, writing its output through the engine."""

    @abstractmethod
    def execute(
        self, path: str, scope: Mapping[str, Any], engine: RenderEngine,
    ) -> None: ...


def _active_engine(environment: Environment) -> RenderEngine | None:
    engines = getattr(environment, "view_engines", None)
    return engines[-1] if engines else None


class _ViewLoader(BaseLoader):
    """Jinja2 loader for resolved paths and engine-relative names.

    Names used by ``{% include %}`` / ``{% extends %}`` go through the
    active engine's search paths and extensions.  A literal path is only
    accepted when the executor is running that resolved path.
    """

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, callable]:
        engine = _active_engine(environment)
        path = engine.resolver.locate(template) if engine is not None else None
        if path is None and template in getattr(environment, "view_paths", ()):
            path = template
        if path is None:
            raise TemplateNotFound(template)

        try:
            source = Path(path).read_text(encoding="utf-8")
            mtime = os.path.getmtime(path)
        except OSError as exc:
            raise TemplateNotFound(template) from exc
        return source, path, lambda: os.path.getmtime(path) == mtime


class ViewExtension(Extension):
    """``capture`` / ``endcapture`` / ``embed`` statement tags."""

    tags = {"capture", "endcapture", "embed"}

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        # Engines and resolved paths currently executing on this environment.
        environment.extend(view_engines=[], view_paths=[])

    def parse(self, parser):
        token = next(parser.stream)
        lineno = token.lineno

        if token.value == "endcapture":
            call = self.call_method("_close_block", [])
        else:
            args = [parser.parse_expression()]
            if parser.stream.skip_if("comma"):
                args.append(parser.parse_expression())
            else:
                args.append(nodes.Const(None))
            method = "_open_block" if token.value == "capture" else "_embed"
            call = self.call_method(method, args)

        return nodes.ExprStmt(call, lineno=lineno)

    def _engine(self) -> RenderEngine:
        engine = _active_engine(self.environment)
        if engine is None:
            raise TemplateRuntimeError(
                "capture/embed tags can only run inside RenderEngine.render()"
            )
        return engine

    def _open_block(self, name: str, payload: Any = None) -> str:
        self._engine().block(name, payload)
        return ""

    def _close_block(self) -> str:
        self._engine().end_block()
        return ""

    def _embed(self, reference: Any, data: Mapping[str, Any] | None = None) -> str:
        self._engine().embed(reference, data)
        return ""


def create_environment(**options: Any) -> Environment:
    """Build the Jinja2 environment used by :class:`JinjaExecutor`."""
    options.setdefault("keep_trailing_newline", True)
    options.setdefault("autoescape", False)
    options.setdefault("cache_size", 0)
    extensions = list(options.pop("extensions", ()))
    extensions.append(ViewExtension)
    return Environment(loader=_ViewLoader(), extensions=extensions, **options)


class JinjaExecutor(BaseExecutor):
    """Render template files with Jinja2.

    Args:
        environment: A prepared environment; must have been created by
            :func:`create_environment` (or carry :class:`ViewExtension` and
            :class:`_ViewLoader`).  Built on demand when omitted.
        **options: Extra ``jinja2.Environment`` keyword arguments, used only
            when *environment* is not given.
    """

    def __init__(self, environment: Environment | None = None, **options: Any) -> None:
        self.environment = environment or create_environment(**options)

    def execute(
        self, path: str, scope: Mapping[str, Any], engine: RenderEngine,
    ) -> None:
        engines = self.environment.view_engines
        paths = self.environment.view_paths
        engines.append(engine)
        paths.append(path)
        try:
            template = self.environment.get_template(path)
            for chunk in template.generate(scope):
                engine.write(chunk)
        finally:
            engines.pop()
            paths.pop()
        logger.debug("Executed template %s", path)
