"""Locate the raw content of variable sets."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping
import logging
import os

from .errors import AmbiguousVariableSetError, UndefinedVariableSetError

logger = logging.getLogger(__name__)


class VariableFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


VARIABLE_FILE_SUFFIXES: Dict[str, VariableFormat] = {
    ".yaml": VariableFormat.YAML,
    ".yml": VariableFormat.YAML,
    ".json": VariableFormat.JSON,
}


@dataclass(frozen=True, slots=True)
class RawVariables:
    name: str
    format: VariableFormat
    content: str
    origin: str


class VariableSource:
    """Read variable sets from a directory, falling back to the environment.

    A set named ``name`` comes from ``<directory>/<name>.{yaml,yml,json}``
    when such a file exists, otherwise from the environment variable ``name``
    whose value is JSON text.
    """

    def __init__(self, directory: Path | str | None, *, environ: Mapping[str, str] | None = None) -> None:
        self.directory = Path(directory) if directory is not None else None
        self.environ = os.environ if environ is None else environ

    def read(self, name: str | None) -> RawVariables:
        if not name:
            raise UndefinedVariableSetError(name)

        path = self.find_file(name)
        if path is not None:
            logger.debug("Reading variables '%s' from %s", name, path)
            return RawVariables(
                name=name,
                format=VARIABLE_FILE_SUFFIXES[path.suffix.lower()],
                content=path.read_text(encoding="utf-8"),
                origin=str(path),
            )

        if name in self.environ:
            logger.debug("Reading variables '%s' from the environment", name)
            return RawVariables(
                name=name,
                format=VariableFormat.JSON,
                content=self.environ[name],
                origin=f"env:{name}",
            )

        raise UndefinedVariableSetError(name)

    def find_file(self, name: str) -> Path | None:
        """Return the file defining ``name``; ``name`` may carry its extension."""
        if self.directory is None or not self.directory.is_dir():
            return None

        direct = self.directory / name
        if direct.suffix.lower() in VARIABLE_FILE_SUFFIXES and direct.is_file():
            return direct

        candidates = [path for path in self._variable_files(self.directory) if path.stem == name]
        if len(candidates) > 1:
            found = "', '".join(path.name for path in candidates)
            raise AmbiguousVariableSetError(
                f"Variables '{name}' are defined by several files: '{found}'. "
                "Keep a single format per variable set."
            )
        return candidates[0] if candidates else None

    def available(self) -> List[str]:
        """Return the names of the variable sets defined in the directory."""
        if self.directory is None or not self.directory.is_dir():
            return []
        return sorted({path.stem for path in self._variable_files(self.directory)})

    @staticmethod
    def _variable_files(directory: Path) -> List[Path]:
        return sorted(
            path
            for path in directory.iterdir()
            if path.suffix.lower() in VARIABLE_FILE_SUFFIXES and path.is_file()
        )


__all__ = ["RawVariables", "VARIABLE_FILE_SUFFIXES", "VariableFormat", "VariableSource"]
