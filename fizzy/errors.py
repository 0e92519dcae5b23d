"""Exceptions raised by the tokenizer and the variables engine."""
from __future__ import annotations

from typing import Any, Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .merger import Collision


class FizzyError(ValueError):
    """Base class for every error surfaced by fizzy."""


class LexerError(FizzyError):
    """Raised when tokenization cannot proceed."""


class UnexpectedInputError(LexerError):
    """No rule matches the input at ``position``."""

    def __init__(self, text: str, position: int) -> None:
        self.position = position
        self.line = text.count("\n", 0, position) + 1
        self.column = position - (text.rfind("\n", 0, position) + 1) + 1
        snippet = text[position:position + 20]
        super().__init__(
            f"Unexpected characters at line {self.line}, column {self.column}: {snippet!r}"
        )


class RuleArityError(LexerError):
    """A rule declares a number of token names that disagrees with its captures."""


class VariablesError(FizzyError):
    """Base class for variable resolution and lookup errors."""


class UndefinedVariableSetError(VariablesError):
    def __init__(self, name: str | None) -> None:
        self.name = name
        super().__init__(f"Invalid vars: `{name}`.")


class AmbiguousVariableSetError(VariablesError):
    """More than one file provides the same variable set."""


class InvalidContentError(VariablesError):
    """Variable content cannot be parsed under its declared format."""


class UnrecognizedFormatError(VariablesError):
    def __init__(self, fmt: Any) -> None:
        self.format = fmt
        super().__init__(f"Unrecognized format: `{fmt}`")


class InconsistentVariablesError(VariablesError):
    """Sibling parents disagree on the value of shared keys."""

    def __init__(self, collisions: Sequence["Collision"]) -> None:
        self.collisions = list(collisions)
        lines = [
            f"\t→ Collision with key=`{c.key}`: value_a=`{c.value_a}` value_b=`{c.value_b}`"
            for c in self.collisions
        ]
        super().__init__("Inconsistent variables definition:\n" + "\n".join(lines))


class CyclicInheritanceError(VariablesError):
    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Circular variables inheritance detected: {' -> '.join(self.chain)}")


class UndefinedVariableError(VariablesError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Undefined variable: `{path}`.")


class TypeMismatchError(VariablesError):
    def __init__(self, path: str, value: Any, expected: str, reason: str | None = None) -> None:
        self.path = path
        self.value = value
        self.expected = expected
        detail = reason or f"it can't be converted to a `{expected}`"
        super().__init__(f"Invalid value `{value}` for variable `{path}`: {detail}.")


class UnsupportedTypeError(VariablesError):
    def __init__(self, type_name: Any) -> None:
        self.type_name = type_name
        super().__init__(f"Unhandled type `{type_name}`.")


__all__ = [
    "AmbiguousVariableSetError",
    "CyclicInheritanceError",
    "FizzyError",
    "InconsistentVariablesError",
    "InvalidContentError",
    "LexerError",
    "RuleArityError",
    "TypeMismatchError",
    "UndefinedVariableError",
    "UndefinedVariableSetError",
    "UnexpectedInputError",
    "UnrecognizedFormatError",
    "UnsupportedTypeError",
    "VariablesError",
]
