"""
.env Loading
============

Settings are read through ``get_env``, which loads a ``.env`` file into
``os.environ`` on first use. Lookup order: an explicit path, then
``./.env``, then ``.env`` at the project root.

Usage:
    from dotdash.core.utils.env_loader import get_env, get_env_int
    port = get_env_int("PORT", 3007)
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off"})

# Path of the .env already applied, None until one is found
_loaded_from: Optional[Path] = None


def get_project_root() -> Path:
    """Directory holding the ``dotdash`` package."""
    return Path(__file__).resolve().parents[3]


def _candidates(env_file: Optional[str]) -> List[Path]:
    if env_file:
        return [Path(env_file)]
    return [Path.cwd() / ".env", get_project_root() / ".env"]


def load_dotdash_env(env_file: Optional[str] = None, override: bool = False) -> bool:
    """
    Load the first existing .env file.

    Once a file has been applied later calls do nothing, unless ``override``
    is set, in which case the file is re-read and wins over existing
    variables.

    Returns:
        True if a .env has been loaded, now or earlier
    """
    global _loaded_from

    if _loaded_from is not None and not override:
        return True

    path = next((p for p in _candidates(env_file) if p.is_file()), None)
    if path is None:
        return False

    load_dotenv(path, override=override)
    _loaded_from = path
    return True


def reset_env_loaded() -> None:
    """Forget the applied .env so the next get_env() looks again."""
    global _loaded_from
    _loaded_from = None


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    load_dotdash_env()
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Parse true/false, 1/0, yes/no or on/off; anything else is ``default``."""
    value = (get_env(key) or "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def get_env_int(key: str, default: int = 0) -> int:
    raw = get_env(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
