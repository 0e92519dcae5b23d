"""Decode variable content and its inheritance directive."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Pattern
import json
import re

import yaml

from .errors import InvalidContentError, UnrecognizedFormatError
from .sources import VariableFormat


PARENTS_PATTERNS: Dict[VariableFormat, Pattern[str]] = {
    VariableFormat.YAML: re.compile(
        r"^#\s*=>\s*inherits\s*(:\s+)?(?P<parents>.+)\s*<=\s*#", re.MULTILINE
    ),
    VariableFormat.JSON: re.compile(
        r"^/\*\s*=>\s*inherits\s*(:\s+)?(?P<parents>.+)\s*<=\s*\*/", re.MULTILINE
    ),
}

_PLACEHOLDER_PATTERN = re.compile(r"none|nothing", re.IGNORECASE)


def _normalize_format(fmt: Any) -> VariableFormat:
    try:
        return VariableFormat(fmt)
    except ValueError:
        raise UnrecognizedFormatError(fmt) from None


def _strip_json_directives(content: str) -> str:
    # The inheritance directive is a comment, which JSON itself does not allow.
    return PARENTS_PATTERNS[VariableFormat.JSON].sub("", content)


def parse_variables(fmt: Any, content: str) -> Dict[str, Any]:
    """Decode ``content`` into a variables mapping according to ``fmt``."""

    fmt = _normalize_format(fmt)
    if fmt is VariableFormat.YAML:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise InvalidContentError(f"Invalid YAML: {exc}") from exc
        if data is None:
            data = {}
    else:
        try:
            data = json.loads(_strip_json_directives(content))
        except json.JSONDecodeError as exc:
            raise InvalidContentError(f"Invalid JSON: `{content}`.") from exc

    if not isinstance(data, Mapping):
        raise InvalidContentError(
            f"Variables must be a mapping at the root, got `{type(data).__name__}`."
        )
    return dict(data)


def parse_parents(fmt: Any, content: str) -> List[str]:
    """Return the parent names declared by the inheritance directive of ``content``."""

    match = PARENTS_PATTERNS[_normalize_format(fmt)].search(content)
    if match is None:
        return []
    parents: List[str] = []
    for raw in match.group("parents").split(","):
        name = raw.strip()
        if name and not _PLACEHOLDER_PATTERN.fullmatch(name):
            parents.append(name)
    return parents


__all__ = ["PARENTS_PATTERNS", "parse_parents", "parse_variables"]
