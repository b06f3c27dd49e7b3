from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol


class Color(Enum):
    """
    An enumeration of the supported foreground colors.  Each color's value
    equals its xterm number.
    """

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    def asfg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        return self.value + 30


@dataclass(frozen=True)
class Style:
    color: Color | None = None
    bold: bool = False

    def as_params(self) -> list[str]:
        params = []
        if self.color is not None:
            params.append(str(self.color.asfg()))
        if self.bold:
            params.append("1")
        return params

    def sgr(self) -> str:
        """
        Return the escape sequence that resets all display attributes and then
        applies this style.  Resetting first means the result does not depend
        on whatever attributes were active beforehand.
        """
        return f"\x1B[{';'.join(['0', *self.as_params()])}m"


#: The style that restores the terminal's default attributes
RESET = Style()

#: The color styles available to prompt templates, keyed by name
COLORS: dict[str, Style] = {
    **{c.name.lower(): Style(c) for c in Color},
    "reset": RESET,
    **{f"bold-{c.name.lower()}": Style(c, bold=True) for c in Color},
}


class Styler(Protocol):
    #: Marker placed before a sequence of non-printing characters
    escape_start: ClassVar[str]

    #: Marker placed after a sequence of non-printing characters
    escape_end: ClassVar[str]

    def escape(self, s: str) -> str: ...

    def wrap(self, raw: str) -> str: ...


class ANSIStyler:
    """Class for styling strings for display immediately in the terminal"""

    escape_start: ClassVar[str] = ""
    escape_end: ClassVar[str] = ""

    def escape(self, s: str) -> str:
        return s

    def wrap(self, raw: str) -> str:
        return raw


class BashStyler:
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    #: Readline's markers for the start & end of invisible characters; unlike
    #: ``\[ ... \]``, these also work in the output of a command substitution
    escape_start: ClassVar[str] = "\x01"
    escape_end: ClassVar[str] = "\x02"

    def escape(self, s: str) -> str:
        """
        Escape characters in the string ``s`` that have special meaning in a
        PS1 variable
        """
        return s.replace("\\", r"\\")

    def wrap(self, raw: str) -> str:
        r"""
        Wrap the escape sequence ``raw`` in ``\x01 ... \x02`` so that Bash
        does not count it towards the length of the prompt
        """
        return f"{self.escape_start}{raw}{self.escape_end}"


class ZshStyler:
    """Class for escaping & styling strings for use in zsh's PS1 variable"""

    escape_start: ClassVar[str] = "%{"
    escape_end: ClassVar[str] = "%}"

    def escape(self, s: str) -> str:
        return s.replace("%", "%%")

    def wrap(self, raw: str) -> str:
        return f"{self.escape_start}{raw}{self.escape_end}"

