"""
Environment-driven settings for lrukit.

Values are read from `LRUKIT_*` environment variables. `load_env` can pull them
from a `.env` file first; variables that are already set always win.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .lru_cache import LRUCache

DEFAULT_CAPACITY = 128
DEFAULT_LOG_LEVEL = "WARNING"

_FALSE_VALUES = ("0", "false", "no", "off")

log = logging.getLogger(__name__)


def load_env(dotenv_path: Optional[str] = None) -> bool:
    """
    Load environment variables from a .env file without overriding existing ones.

    Args:
        dotenv_path: Path to the file. If not given, the nearest `.env` found by
            walking up from the current directory is used.

    Returns:
        True if a file was found and defined at least one variable.

    Raises:
        FileNotFoundError: If `dotenv_path` is given but is not a file.
    """
    if dotenv_path and not os.path.isfile(dotenv_path):
        raise FileNotFoundError(f"Environment file not found: {dotenv_path}")
    path = dotenv_path or find_dotenv(usecwd=True)
    if not path:
        return False
    log.debug(f"Loading environment from {path}")
    return load_dotenv(path, override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Config:
    default_capacity: int = DEFAULT_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL
    progress: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            default_capacity=_int_env("LRUKIT_DEFAULT_CAPACITY", DEFAULT_CAPACITY),
            log_level=os.environ.get("LRUKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            progress=os.environ.get("LRUKIT_PROGRESS", "1").strip().lower() not in _FALSE_VALUES,
        )

    def new_cache(self, **kwargs) -> LRUCache:
        """Build an LRUCache sized by `default_capacity`."""
        return LRUCache(self.default_capacity, **kwargs)
