"""Workspace defaults from .env.defaults.

The suite is often run from an installed copy of the package, so the file
is looked up in the current working directory first and then in the
checkout that contains this module.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional

ENV_DEFAULTS_FILE = ".env.defaults"
_QUOTES = ('"', "'")


def _find_defaults_file() -> Optional[Path]:
    checkout_root = Path(__file__).resolve().parents[1]
    for directory in (Path.cwd(), checkout_root):
        candidate = directory / ENV_DEFAULTS_FILE
        if candidate.is_file():
            return candidate
    return None


def parse_env_lines(lines: Iterable[str]) -> Dict[str, str]:
    """KEY=VALUE pairs; blank lines, comments and lines without '=' are skipped.

    A value wrapped in matching single or double quotes is unquoted.
    """
    parsed: Dict[str, str] = {}
    for line in map(str.strip, lines):
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        value = value.strip()
        if len(value) > 1 and value[0] == value[-1] and value[0] in _QUOTES:
            value = value[1:-1]
        parsed[key.strip()] = value
    return parsed


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    path = _find_defaults_file()
    if path is None:
        return {}
    return parse_env_lines(path.read_text(encoding="utf-8").splitlines())


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)
