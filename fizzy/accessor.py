"""Typed, dotted-path access to resolved variables."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Protocol
import os
import sys

from .errors import TypeMismatchError, UndefinedVariableError, UnsupportedTypeError


class VarType(Enum):
    STRING = "string"
    SYMBOL = "symbol"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    PATH = "path"
    FILE = "file"
    DIRECTORY = "directory"


_TYPE_ALIASES = {
    "str": VarType.STRING,
    "sym": VarType.SYMBOL,
    "int": VarType.INTEGER,
    "bool": VarType.BOOLEAN,
    "pth": VarType.PATH,
    "dir": VarType.DIRECTORY,
}


@dataclass(frozen=True, slots=True)
class TypeSpec:
    kind: VarType
    nullable: bool = False

    @classmethod
    def parse(cls, value: "TypeSpec | VarType | str") -> "TypeSpec":
        """Build a type from ``"integer"``, ``"integer?"`` (nullable) or an alias."""
        if isinstance(value, TypeSpec):
            return value
        if isinstance(value, VarType):
            return cls(value)
        if not isinstance(value, str):
            raise UnsupportedTypeError(value)
        text = value.strip()
        nullable = text.endswith("?")
        tag = text[:-1] if nullable else text
        kind = _TYPE_ALIASES.get(tag)
        if kind is None:
            try:
                kind = VarType(tag)
            except ValueError:
                raise UnsupportedTypeError(value) from None
        return cls(kind, nullable)

    def __str__(self) -> str:
        return self.kind.value + ("?" if self.nullable else "")


class PathChecker(Protocol):
    def exists(self, path: Any) -> bool: ...

    def isfile(self, path: Any) -> bool: ...

    def isdir(self, path: Any) -> bool: ...


@dataclass(frozen=True, slots=True)
class Literal:
    value: Any

    def evaluate(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class Producer:
    factory: Callable[[], Any]

    def evaluate(self) -> Any:
        return self.factory()


class Renderable(list):
    """A list that renders as its only element, or joined by ``separator``."""

    def __init__(self, items: Iterable[Any] = (), separator: str | None = None) -> None:
        super().__init__(items)
        self.separator = separator

    def render(self) -> str:
        if len(self) == 1:
            return str(self[0])
        if self.separator is not None:
            return self.separator.join(str(item) for item in self)
        return repr(list(self))

    def __str__(self) -> str:
        return self.render()


def split_path(path: str) -> List[str]:
    return [part for part in str(path).split(".") if part]


def lookup(structure: Mapping[str, Any], path: str) -> Any:
    """Return the value at the dotted ``path`` or ``None`` when any key is missing."""
    current: Any = structure
    for part in split_path(path):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def _coerce_boolean(path: str, value: Any) -> bool | None:
    if value is None:
        return None
    if value is True or str(value) == "true":
        return True
    if value is False or str(value) == "false":
        return False
    raise TypeMismatchError(path, value, VarType.BOOLEAN.value, "it can't be converted to a boolean")


def _coerce_integer(path: str, value: Any) -> int:
    if isinstance(value, bool):
        raise TypeMismatchError(path, value, VarType.INTEGER.value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TypeMismatchError(path, value, VarType.INTEGER.value) from None


def _ensure_instance(path: str, value: Any, spec: TypeSpec, *types: type) -> Any:
    if isinstance(value, types) and not (bool not in types and isinstance(value, bool)):
        return value
    raise TypeMismatchError(path, value, spec.kind.value, f"it's not a `{spec.kind.value}`")


def typize(
    path: str,
    value: Any,
    type: TypeSpec | VarType | str | None,
    *,
    strict: bool = False,
    path_checker: PathChecker = os.path,
) -> Any:
    """Coerce ``value`` to ``type``, or only validate it when ``strict``."""

    if type is None:
        return value
    spec = TypeSpec.parse(type)
    if spec.nullable and value is None:
        return None

    kind = spec.kind
    if kind is VarType.STRING:
        if strict:
            return _ensure_instance(path, value, spec, str)
        return "" if value is None else str(value)
    if kind is VarType.SYMBOL:
        if strict:
            if isinstance(value, str) and value.isidentifier():
                return sys.intern(value)
            raise TypeMismatchError(path, value, kind.value, "it's not a `symbol`")
        return sys.intern("" if value is None else str(value))
    if kind is VarType.INTEGER:
        if strict:
            return _ensure_instance(path, value, spec, int)
        return _coerce_integer(path, value)
    if kind is VarType.BOOLEAN:
        if strict:
            return _ensure_instance(path, value, spec, bool)
        return _coerce_boolean(path, value)

    if not isinstance(value, (str, os.PathLike)):
        raise TypeMismatchError(path, value, kind.value)
    if strict:
        if kind is VarType.PATH and not path_checker.exists(value):
            raise TypeMismatchError(path, value, kind.value, "it doesn't exist")
        if kind is VarType.FILE and not path_checker.isfile(value):
            raise TypeMismatchError(path, value, kind.value, "it isn't a file")
        if kind is VarType.DIRECTORY and not path_checker.isdir(value):
            raise TypeMismatchError(path, value, kind.value, "it isn't a directory")
    return Path(value)


class VariableAccessor:
    """Read-only view over a resolved variables structure."""

    FEATURES_KEY = "features"

    def __init__(self, variables: Mapping[str, Any], *, path_checker: PathChecker = os.path) -> None:
        self.variables = variables
        self.path_checker = path_checker

    def get(self, path: str, type: TypeSpec | VarType | str | None = None, *, strict: bool = False) -> Any:
        value = lookup(self.variables, path)
        return typize(path, value, type, strict=strict, path_checker=self.path_checker)

    def get_required(self, path: str, type: TypeSpec | VarType | str | None = None, *, strict: bool = False) -> Any:
        value = lookup(self.variables, path)
        if value is None:
            raise UndefinedVariableError(path)
        return typize(path, value, type, strict=strict, path_checker=self.path_checker)

    def has_feature(self, feature_name: str) -> bool:
        features = self.get_required(self.FEATURES_KEY)
        if isinstance(features, (str, bytes)) or not isinstance(features, Iterable):
            raise TypeMismatchError(self.FEATURES_KEY, features, "list")
        return str(feature_name) in features

    def select_for_enabled_features(
        self,
        mapping: Mapping[str, Literal | Producer | Any],
        separator: str | None = None,
    ) -> Renderable:
        """Collect the values associated with enabled features, in ``mapping`` order.

        ``Producer`` values are only called for enabled features; anything that
        is not a ``Producer`` is returned as is.
        """
        data: List[Any] = []
        for feature_name, associated in mapping.items():
            if not self.has_feature(feature_name):
                continue
            if isinstance(associated, (Literal, Producer)):
                data.append(associated.evaluate())
            else:
                data.append(associated)
        return Renderable(data, separator)


__all__ = [
    "Literal",
    "PathChecker",
    "Producer",
    "Renderable",
    "TypeSpec",
    "VarType",
    "VariableAccessor",
    "lookup",
    "split_path",
    "typize",
]
