from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass
import os
from typing import Any
from . import info
from .colors import ColorStack
from .errors import EnvLookupError, PrimitiveArgumentError
from .git import SHORT_HASH_LEN, BranchResolver, RepoLocator
from .printer import Printer
from .styles import COLORS, ANSIStyler, Style, Styler


@dataclass(frozen=True)
class ColorBlock:
    """
    A sequence of prompt values to be rendered in the given style.  Rendering
    the block pushes the style onto the color stack beforehand and pops it
    afterwards.
    """

    style: Style
    body: tuple[Any, ...]


def colorizer(name: str, style: Style) -> Callable[..., ColorBlock]:
    def color(*body: Any) -> ColorBlock:
        return ColorBlock(style, body)

    color.__name__ = identifier(name)
    color.__doc__ = f"Render the arguments in {name}"
    return color


def identifier(name: str) -> str:
    """
    Convert the name of a primitive to the Python identifier it is bound to in
    prompt templates, e.g., ``has-git?`` to ``has_git``
    """
    return name.removesuffix("?").replace("-", "_")


def getenv(*args: Any) -> str:
    """Return the value of the environment variable named by the argument"""
    if len(args) != 1:
        raise PrimitiveArgumentError("getenv", "1 argument")
    (key,) = args
    if not isinstance(key, str):
        raise PrimitiveArgumentError("getenv", "a string argument")
    try:
        return os.environ[key]
    except KeyError:
        raise EnvLookupError(key) from None


class Primitives:
    """
    The named values & functions available to prompt templates.  A single
    instance owns the repository locator, the color stack, and the printer for
    the duration of the process.
    """

    def __init__(
        self,
        styler: Styler | None = None,
        locator: RepoLocator | None = None,
        short_hash_len: int = SHORT_HASH_LEN,
        exit_code: int = 0,
    ) -> None:
        if styler is None:
            styler = ANSIStyler()
        self.styler = styler
        self.printer = Printer(styler)
        self.colors = ColorStack(styler)
        self.locator = locator if locator is not None else RepoLocator()
        self.resolver = BranchResolver(self.locator, short_hash_len)
        self.exit_code = exit_code
        self.table: dict[str, Any] = {
            "has-git?": self.has_git,
            "git-dir": self.git_dir,
            "git-workdir": self.git_workdir,
            "git-branch": self.git_branch,
            "git-detached?": self.git_detached,
            "getenv": getenv,
            "username": info.username,
            "host": info.hostname,
            "cwd": info.cwdstr,
            "short-cwd": info.short_cwdstr,
            "exit-code": self.get_exit_code,
            "space": " ",
            "column": self.column,
            "row": self.row,
        }
        for name, style in COLORS.items():
            self.table[name] = colorizer(name, style)

    def __getitem__(self, name: str) -> Any:
        return self.table[name]

    def __contains__(self, name: object) -> bool:
        return name in self.table

    def names(self) -> list[str]:
        return list(self.table)

    def namespace(self) -> dict[str, Any]:
        """
        Return the primitives keyed by the identifiers they are bound to in
        prompt templates
        """
        return {identifier(name): value for name, value in self.table.items()}

    def has_git(self) -> bool:
        return self.locator.locate() is not None

    def git_dir(self) -> str | None:
        loc = self.locator.locate()
        return str(loc.git_dir) if loc is not None else None

    def git_workdir(self) -> str | None:
        loc = self.locator.locate()
        return str(loc.work_dir) if loc is not None else None

    def git_branch(self) -> str | None:
        b = self.resolver.branch()
        return b.name if b is not None else None

    def git_detached(self) -> bool:
        b = self.resolver.branch()
        return b is not None and b.detached

    def get_exit_code(self) -> int:
        return self.exit_code

    def column(self) -> int:
        return self.printer.column

    def row(self) -> int:
        return self.printer.row
