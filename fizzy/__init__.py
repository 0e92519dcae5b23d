"""Rule-driven tokenizer and hierarchical variable resolution."""
from __future__ import annotations

from .accessor import Literal, Producer, Renderable, TypeSpec, VarType, VariableAccessor
from .errors import (
    AmbiguousVariableSetError,
    CyclicInheritanceError,
    FizzyError,
    InconsistentVariablesError,
    InvalidContentError,
    LexerError,
    RuleArityError,
    TypeMismatchError,
    UndefinedVariableError,
    UndefinedVariableSetError,
    UnexpectedInputError,
    UnrecognizedFormatError,
    UnsupportedTypeError,
    VariablesError,
)
from .lexer import EOS, SKIP, RuleSet, Token, TokenRule, Tokenizer
from .merger import Collision
from .resolver import VariableResolver, resolve_variables
from .sources import VariableFormat, VariableSource

__version__ = "0.1.0"

__all__ = [
    "AmbiguousVariableSetError",
    "Collision",
    "CyclicInheritanceError",
    "EOS",
    "FizzyError",
    "InconsistentVariablesError",
    "InvalidContentError",
    "LexerError",
    "Literal",
    "Producer",
    "Renderable",
    "RuleArityError",
    "RuleSet",
    "SKIP",
    "Token",
    "TokenRule",
    "Tokenizer",
    "TypeMismatchError",
    "TypeSpec",
    "UndefinedVariableError",
    "UndefinedVariableSetError",
    "UnexpectedInputError",
    "UnrecognizedFormatError",
    "UnsupportedTypeError",
    "VarType",
    "VariableAccessor",
    "VariableFormat",
    "VariableResolver",
    "VariableSource",
    "VariablesError",
    "resolve_variables",
]
