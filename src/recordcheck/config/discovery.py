"""Config file discovery.

Walk-up finder locates recordcheck.toml, the way git finds .git/.
The RECORDCHECK_CONFIG env var and the --config flag override the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "recordcheck.toml"
CONFIG_ENV_VAR = "RECORDCHECK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for recordcheck.toml.

    Returns the path to the config file, or None if not found.
    Checks RECORDCHECK_CONFIG first; a set-but-missing path yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for candidate_dir in (current, *current.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
