from __future__ import annotations
from dataclasses import dataclass
from .styles import ANSIStyler, Styler


@dataclass(frozen=True)
class Segment:
    """A piece of prompt output"""

    text: str

    #: `True` iff the text occupies columns on the terminal.  Terminal control
    #: sequences are uncounted and are written without escaping.
    counted: bool

    @classmethod
    def visible(cls, text: str) -> Segment:
        return cls(text, counted=True)

    @classmethod
    def invisible(cls, text: str) -> Segment:
        return cls(text, counted=False)


class Printer:
    """
    Collects the segments of a rendered prompt while keeping track of the
    cursor position that the visible text would move the cursor to
    """

    def __init__(self, styler: Styler | None = None) -> None:
        self.styler: Styler = styler if styler is not None else ANSIStyler()
        self.column = 1
        self.row = 1
        self.parts: list[str] = []

    def emit(self, seg: Segment) -> None:
        if seg.counted:
            for ch in seg.text:
                if ch == "\n":
                    self.column = 1
                    self.row += 1
                else:
                    self.column += 1
            self.parts.append(self.styler.escape(seg.text))
        else:
            self.parts.append(seg.text)

    def getvalue(self) -> str:
        return "".join(self.parts)
