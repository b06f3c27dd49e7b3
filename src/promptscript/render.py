from __future__ import annotations
import logging
import os
from pathlib import Path
import runpy
from typing import Any
from .errors import PromptError, TemplateError
from .primitives import ColorBlock, Primitives
from .printer import Segment

log = logging.getLogger(__name__)

#: The name of the variable that a prompt template must assign the prompt to
PROMPT_VAR = "PROMPT"


def load_template(path: str | Path, namespace: dict[str, Any]) -> Any:
    """
    Execute the Python file at ``path`` with the primitives in ``namespace``
    available as globals, and return the value it assigns to ``PROMPT``
    """
    log.debug("Loading prompt template from %s", path)
    try:
        env = runpy.run_path(str(path), init_globals=namespace)
    except PromptError:
        raise
    except OSError as e:
        raise TemplateError(f"{path}: {e.strerror or e}") from e
    except Exception as e:
        raise TemplateError(f"{path}: {type(e).__name__}: {e}") from e
    try:
        return env[PROMPT_VAR]
    except KeyError:
        raise TemplateError(f"{path}: template does not define {PROMPT_VAR}") from None


def default_prompt(prims: Primitives) -> list[Any]:
    """
    The prompt used when no template is given: ``user@host:cwd@branch$ ``,
    with the Git portion omitted outside of a repository
    """
    return [
        prims["bold-green"](prims["username"], "@", prims["host"]),
        ":",
        prims["bold-blue"](prims["short-cwd"]),
        lambda: (
            ["@", prims["yellow"](prims["git-branch"])]
            if prims["has-git?"]()
            else None
        ),
        "$ ",
    ]


class Renderer:
    """
    Walks a prompt value, calling any lazy primitives it encounters, and sends
    the resulting text to the primitives' printer
    """

    def __init__(self, prims: Primitives) -> None:
        self.prims = prims

    def render(self, value: Any) -> str:
        self.walk(value)
        if self.prims.colors.depth:
            raise RuntimeError(
                f"Color stack not empty after rendering: {self.prims.colors.stack!r}"
            )
        return self.prims.printer.getvalue()

    def walk(self, value: Any) -> None:
        emit = self.prims.printer.emit
        if value is None or isinstance(value, bool):
            pass
        elif isinstance(value, str):
            emit(Segment.visible(value))
        elif isinstance(value, (int, float)):
            emit(Segment.visible(str(value)))
        elif isinstance(value, os.PathLike):
            emit(Segment.visible(os.fspath(value)))
        elif isinstance(value, (list, tuple)):
            for v in value:
                self.walk(v)
        elif isinstance(value, ColorBlock):
            with self.prims.colors.scope(value.style, emit):
                self.walk(value.body)
        elif callable(value):
            try:
                result = value()
            except (PromptError, RuntimeError):
                # RuntimeError signals a corrupted color stack
                raise
            except Exception as e:
                raise TemplateError(f"{type(e).__name__}: {e}") from e
            self.walk(result)
        else:
            raise TemplateError(
                f"Cannot render value of type {type(value).__name__}: {value!r}"
            )
