"""Resolve a variable set together with everything it inherits."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence
import logging

from .errors import CyclicInheritanceError, InconsistentVariablesError
from .merger import deep_merge, find_collisions, merge_all
from .parser import parse_parents, parse_variables
from .sources import VariableSource

logger = logging.getLogger(__name__)


class VariableResolver:
    """Build the fully merged variables of a named set.

    Parents are resolved in declaration order. Sibling parents must agree on
    every key they share, the set itself may override anything it inherits.
    """

    def __init__(self, source: VariableSource) -> None:
        self.source = source

    def resolve(self, name: str) -> Dict[str, Any]:
        logger.info("vars: %s", name)
        return self._resolve_single(name, chain=[])

    def _resolve_single(self, name: str, *, chain: List[str]) -> Dict[str, Any]:
        if name in chain:
            raise CyclicInheritanceError(chain + [name])
        chain.append(name)

        raw = self.source.read(name)
        self_vars = parse_variables(raw.format, raw.content)
        parents = parse_parents(raw.format, raw.content)
        if parents:
            logger.debug("Variables '%s' inherit from: %s", name, ", ".join(parents))

        parents_vars = self._merge_parents(parents, self_vars, chain=chain)
        chain.pop()
        return deep_merge(parents_vars, self_vars)

    def _merge_parents(
        self,
        parents: Sequence[str],
        self_vars: Mapping[str, Any],
        *,
        chain: List[str],
    ) -> Dict[str, Any]:
        resolved: List[Mapping[str, Any]] = []
        for parent in parents:
            resolved.append(self._resolve_single(parent, chain=chain))
            collisions = find_collisions(resolved, overrides=self_vars)
            if collisions:
                raise InconsistentVariablesError(collisions)
        return merge_all(resolved)


def resolve_variables(
    directory: Path | str | None,
    name: str,
    *,
    environ: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Resolve ``name`` from the variable sets stored in ``directory``."""
    return VariableResolver(VariableSource(directory, environ=environ)).resolve(name)


__all__ = ["VariableResolver", "resolve_variables"]
