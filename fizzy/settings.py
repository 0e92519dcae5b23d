"""Tool settings read from a configuration file and the environment."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping
import json
import os
import tomllib

import yaml

ENV_CFG = "FIZZY_CFG"
ENV_VARS_DIR = "FIZZY_VARS_DIR"
ENV_VERBOSITY = "FIZZY_VERBOSITY"

SETTINGS_DECODERS: Dict[str, Callable[[str], Any]] = {
    ".toml": tomllib.loads,
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}
"""Settings file decoders, keyed by lower-case suffix."""


def read_settings_file(path: Path) -> Mapping[str, Any]:
    """Decode the settings file at ``path``; an empty file means no settings."""

    decoder = SETTINGS_DECODERS.get(path.suffix.lower())
    if decoder is None:
        supported = ", ".join(sorted(SETTINGS_DECODERS))
        raise ValueError(f"Unsupported settings file '{path.name}'. Supported suffixes: {supported}")

    data = decoder(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"Settings file '{path}' must contain a mapping at the root")
    return data


def _parse_verbosity(value: Any, *, origin: str) -> int:
    try:
        verbosity = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{origin} must be a non-negative integer, got {value!r}") from None
    if verbosity < 0:
        raise ValueError(f"{origin} must be a non-negative integer, got {value!r}")
    return verbosity


@dataclass(slots=True)
class FizzySettings:
    vars_dir: Path | None = None
    verbosity: int = 0
    cfg_file_path: Path | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base_dir: Path | None = None) -> "FizzySettings":
        section = data.get("fizzy", data) if isinstance(data, Mapping) else {}
        if not isinstance(section, Mapping):
            raise TypeError("The `fizzy` configuration section must be a mapping")
        vars_dir = section.get("vars_dir")
        path = Path(str(vars_dir)).expanduser() if vars_dir else None
        if path is not None and base_dir is not None and not path.is_absolute():
            path = base_dir / path
        verbosity = section.get("verbosity")
        return cls(
            vars_dir=path,
            verbosity=_parse_verbosity(verbosity, origin="verbosity") if verbosity is not None else 0,
        )

    @classmethod
    def load(
        cls,
        cfg_file_path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> "FizzySettings":
        """Read the configuration file, then apply environment overrides."""

        environ = os.environ if environ is None else environ
        if cfg_file_path is None and environ.get(ENV_CFG):
            cfg_file_path = Path(environ[ENV_CFG]).expanduser()

        settings = cls()
        if cfg_file_path is not None:
            data = read_settings_file(cfg_file_path)
            settings = cls.from_mapping(data, base_dir=cfg_file_path.parent)
            settings.cfg_file_path = cfg_file_path

        if environ.get(ENV_VARS_DIR):
            settings.vars_dir = Path(environ[ENV_VARS_DIR]).expanduser()
        if environ.get(ENV_VERBOSITY):
            settings.verbosity = _parse_verbosity(environ[ENV_VERBOSITY], origin=ENV_VERBOSITY)
        return settings

    def with_overrides(self, *, vars_dir: Path | None = None, verbosity: int = 0) -> "FizzySettings":
        """Apply command line values; a zero verbosity keeps the configured one."""
        return replace(
            self,
            vars_dir=vars_dir if vars_dir is not None else self.vars_dir,
            verbosity=verbosity or self.verbosity,
        )


__all__ = [
    "ENV_CFG",
    "ENV_VARS_DIR",
    "ENV_VERBOSITY",
    "FizzySettings",
    "SETTINGS_DECODERS",
    "read_settings_file",
]
