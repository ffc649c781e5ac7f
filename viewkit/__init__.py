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

"""Template rendering with search paths and post-processed output blocks.

Finds templates across named directories, renders them with Jinja2 and lets
templates capture regions of their output for post-processing.

Usage::

    from viewkit import RenderEngine

    engine = RenderEngine({
        "paths": {"site": "views", "theme": "themes/default"},
        "extension": ["html", "txt"],
        "default_template": "404",
    })
    engine.assign("title", "Home")
    html = engine.render("pages/index", {"user": "ada"})
    footer = engine.render("theme::footer")
"""

from viewkit.capture import CaptureFrame, CaptureResult, CaptureStack
from viewkit.engine import RenderEngine
from viewkit.executors import BaseExecutor, JinjaExecutor
from viewkit.options import ViewOptions
from viewkit.paths import PathEntry, PathRegistry, derive_path_id, is_valid_identifier
from viewkit.resolver import InvalidReferenceError, Resolution, TemplateResolver
from viewkit.transforms import minimize, register_transform

__version__ = "0.1.0"

__all__ = [
    "BaseExecutor",
    "CaptureFrame",
    "CaptureResult",
    "CaptureStack",
    "InvalidReferenceError",
    "JinjaExecutor",
    "PathEntry",
    "PathRegistry",
    "RenderEngine",
    "Resolution",
    "TemplateResolver",
    "ViewOptions",
    "derive_path_id",
    "is_valid_identifier",
    "minimize",
    "register_transform",
]
