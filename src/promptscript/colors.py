from __future__ import annotations
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from .printer import Segment
from .styles import RESET, Style, Styler


class ColorStack:
    """
    The stack of colors currently applied to the prompt.  Every push & pop
    emits a complete escape sequence (reset, then apply) so that leaving a
    nested color restores the enclosing one exactly.
    """

    def __init__(self, styler: Styler) -> None:
        self.styler = styler
        self.stack: list[Style] = []

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def top(self) -> Style | None:
        return self.stack[-1] if self.stack else None

    def push(self, style: Style) -> Segment:
        self.stack.append(style)
        return Segment.invisible(self.styler.wrap(style.sgr()))

    def pop(self) -> Segment:
        if not self.stack:
            raise RuntimeError("Color stack popped while empty")
        self.stack.pop()
        current = self.stack[-1] if self.stack else RESET
        return Segment.invisible(self.styler.wrap(current.sgr()))

    @contextmanager
    def scope(self, style: Style, sink: Callable[[Segment], None]) -> Iterator[None]:
        """
        Emit the escape sequence for ``style`` to ``sink``, run the body of the
        ``with`` block, and then emit the sequence that restores the enclosing
        color, even if the body raises an exception
        """
        sink(self.push(style))
        try:
            yield
        finally:
            sink(self.pop())
