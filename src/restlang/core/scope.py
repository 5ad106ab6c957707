"""
Scope stack for the restlang document builder.

The DSL has no indentation: a line attaches to whatever open scope fits it.
Frames are kept innermost on top, and looking a scope up discards every
frame above the match, which is how scopes close implicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .grammar import DirectiveType


class FrameKind(StrEnum):
    """Kinds of open scopes."""

    RESOURCE = "resource"
    RECEIVER = "receiver"
    EMITTER = "emitter"
    METHOD = "method"
    PROPERTY = "property"
    PARAM = "param"
    QUERY = "query"
    BODY = "body"
    FILE = "file"
    RESPONSE = "response"


# Frame kinds opened by field directives
FIELD_FRAMES = frozenset(
    {FrameKind.PARAM, FrameKind.QUERY, FrameKind.BODY, FrameKind.FILE, FrameKind.RESPONSE}
)


def field_frame_kind(directive: DirectiveType) -> FrameKind:
    """Get the frame kind a field directive opens."""
    kind = FrameKind(directive.value)
    if kind not in FIELD_FRAMES:
        raise ValueError(f"'{directive}' is not a field directive")
    return kind


@dataclass
class Frame:
    """
    An open scope.

    Attributes:
        kind: What the frame holds
        node: The IR object lines attach to
        depth: Nesting depth of the directive that opened it
    """

    kind: FrameKind
    node: Any
    depth: int = 1


FrameMatcher = Callable[[Frame], bool]


class ScopeStack:
    """Stack of open frames, innermost on top."""

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        """Iterate innermost first."""
        return reversed(self._frames)

    @property
    def top(self) -> Frame | None:
        """Innermost frame, or None when nothing is open."""
        if not self._frames:
            return None
        return self._frames[-1]

    def reset(self, frame: Frame) -> None:
        """Close every open scope and open frame."""
        self._frames = [frame]

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop_to(self, target: Iterable[FrameKind] | FrameMatcher) -> Frame | None:
        """
        Discard frames until the top one matches.

        Args:
            target: Frame kinds to stop at, or a predicate over frames

        Returns:
            The matching frame (left on the stack), or None once the stack
            is empty
        """
        if callable(target):
            matches = target
        else:
            kinds = frozenset(target)

            def matches(frame: Frame) -> bool:
                return frame.kind in kinds

        while self._frames and not matches(self._frames[-1]):
            self._frames.pop()
        return self.top

    def kinds(self) -> list[FrameKind]:
        """Frame kinds, innermost first."""
        return [frame.kind for frame in self]
