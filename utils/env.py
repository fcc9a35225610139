"""Environment helper utilities.

Loads a ``.env`` file from the project root so that ``SIGNAL_*`` settings
defined there are visible to ``config.EngineConfig.from_env``. Variables
already present in the process environment win over the file.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

__all__ = ["load_project_dotenv"]

ENV_FILE_VARIABLE = "SIGNAL_ENV_FILE"


def _find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory containing ``pyproject.toml`` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv() -> bool:
    """Load the project ``.env`` (or the file named by ``SIGNAL_ENV_FILE``). Returns True if a file was loaded."""
    explicit = os.getenv(ENV_FILE_VARIABLE)
    dotenv_path = Path(explicit) if explicit else _find_project_root() / ".env"
    if not dotenv_path.exists():
        return False
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return True
