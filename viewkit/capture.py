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

"""Nested output capture.

All template output goes through :meth:`CaptureStack.write`, which appends
to the innermost open frame or, with no frame open, to the root output.
Closing a frame runs its transform over the captured text and writes the
result one level out, so an inner block's transformed output becomes raw
text of the enclosing block::

    stack.open("a")      # a = str.upper
    stack.write("X")
    stack.open("b")      # b = reverse
    stack.write("Y")
    stack.close()        # "Y" reversed into frame a
    stack.write("Z")
    stack.close()        # root receives "XYZ".upper()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Transform = Callable[[str, Any], str]


class CaptureResult(Enum):
    """Outcome of an open/close call."""

    OPENED = "opened"
    CLOSED = "closed"
    SKIPPED = "skipped"


@dataclass
class CaptureFrame:
    """An open block collecting output until it is closed."""

    name: str
    transform: Transform
    payload: Any = None
    buffer: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.buffer)


class CaptureStack:
    """LIFO stack of capture frames over a root output buffer.

    Args:
        blocks: Block name → transform mapping consulted by :meth:`open`.
            The mapping is referenced, not copied, so later registrations
            are visible.
    """

    def __init__(self, blocks: Mapping[str, Transform] | None = None) -> None:
        self.blocks: Mapping[str, Transform] = blocks if blocks is not None else {}
        self._frames: list[CaptureFrame] = []
        self._root: list[str] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> CaptureFrame | None:
        return self._frames[-1] if self._frames else None

    def write(self, text: str) -> None:
        if not text:
            return
        target = self._frames[-1].buffer if self._frames else self._root
        target.append(text)

    def open(self, name: str, payload: Any = None) -> CaptureResult:
        """Start capturing for block *name*; unknown names are ignored."""
        transform = self.blocks.get(name)
        if transform is None:
            return CaptureResult.SKIPPED
        self._frames.append(CaptureFrame(name=name, transform=transform, payload=payload))
        return CaptureResult.OPENED

    def close(self) -> CaptureResult:
        """Finish the innermost block and emit its transformed text."""
        if not self._frames:
            return CaptureResult.SKIPPED
        frame = self._frames.pop()
        self.write(frame.transform(frame.text, frame.payload))
        return CaptureResult.CLOSED

    def drain(self, depth: int = 0) -> int:
        """Flush frames above *depth* without running their transforms.

        Returns the number of frames flushed.
        """
        flushed = 0
        while len(self._frames) > depth:
            frame = self._frames.pop()
            self.write(frame.text)
            flushed += 1
        if flushed:
            logger.debug("Flushed %d unclosed block(s)", flushed)
        return flushed

    def take_output(self) -> str:
        """Return and clear everything written at root level."""
        text = "".join(self._root)
        self._root = []
        return text

    def reset(self) -> None:
        self._frames = []
        self._root = []
