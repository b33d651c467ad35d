"""Config file discovery and loading.

Walk-up finder locates atdata.toml, similar to how git finds .git/.
Supports ATDATA_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from atdata.config.models import AtdataConfig

CONFIG_FILENAME = "atdata.toml"
CONFIG_ENV_VAR = "ATDATA_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for atdata.toml.

    Returns the path to the config file, or None if not found.
    ATDATA_CONFIG, when set, wins over the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> AtdataConfig:
    """Load and validate config for library callers that don't use the CLI.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default AtdataConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return AtdataConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return AtdataConfig.model_validate(data)
