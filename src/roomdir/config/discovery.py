"""Config file discovery and loading.

Walk-up finder locates roomdir.toml, similar to how git finds .git/.
Supports ROOMDIR_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from roomdir.config.models import RoomdirConfig

CONFIG_FILENAME = "roomdir.toml"
CONFIG_ENV_VAR = "ROOMDIR_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for roomdir.toml.

    Returns the path to the config file, or None if not found.
    Checks ROOMDIR_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_config(path: Path | None = None, cwd: Path | None = None) -> RoomdirConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default RoomdirConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return RoomdirConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return RoomdirConfig.model_validate(data)
