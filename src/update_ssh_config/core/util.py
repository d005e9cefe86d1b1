from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional

# ASCII whitespace only: space, \t, \n, \f, \r
_WORD_RE = re.compile(r"[^ \t\n\f\r]+")


class HomeDirectoryError(RuntimeError):
    pass


def split_words(line: str) -> List[str]:
    """Split a config line into ASCII-whitespace separated words.

    Blank and whitespace-only lines give an empty list.
    """
    return _WORD_RE.findall(line)


def default_config_path(home_provider: Optional[Callable[[], Optional[Path]]] = None) -> Path:
    """Return ``<home>/.ssh/config`` for the home directory given by home_provider.

    home_provider defaults to ``Path.home``. It may return None or raise
    RuntimeError (as ``Path.home`` does when no home can be resolved); both
    become HomeDirectoryError.
    """
    provider = home_provider or Path.home
    try:
        home = provider()
    except (RuntimeError, KeyError) as exc:
        raise HomeDirectoryError("Failed to determine home directory.") from exc
    if home is None:
        raise HomeDirectoryError("Failed to determine home directory.")
    return Path(home) / ".ssh" / "config"

__all__ = ["HomeDirectoryError", "split_words", "default_config_path"]
