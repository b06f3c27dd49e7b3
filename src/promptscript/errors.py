from __future__ import annotations


class PromptError(Exception):
    """Base class for errors reported to the user in place of a prompt"""


class PrimitiveArgumentError(PromptError, TypeError):
    """Raised when a primitive is called with the wrong number or type of
    arguments"""

    def __init__(self, primitive: str, expectation: str) -> None:
        super().__init__(f"{primitive!r} requires {expectation}")
        self.primitive = primitive
        self.expectation = expectation


class EnvLookupError(PromptError, KeyError):
    """Raised by ``getenv`` when the requested variable is not set"""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"'getenv' failed with key {self.key!r}: variable not set"


class TemplateError(PromptError):
    """Raised when a prompt template cannot be loaded or rendered"""
