from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional


# Resolve installation dir (glisp package directory)
_GLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _GLISP_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = logging.WARNING

PRELUDE_FILE = 'core.glisp'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('GLISP_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_load_paths() -> List[Path]:
    return paths_from_env('GLISP_LOAD_PATH', [Path.cwd()])


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('GLISP_RECURSION_LIMIT', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid GLISP_RECURSION_LIMIT=%r", raw)
        return None


def configure_recursion_limit(limit: Optional[int] = None) -> None:
    """Raise the process-wide host recursion limit; never lowers it. Opt-in, like configure_logging."""
    limit = limit if limit is not None else get_recursion_limit()
    if limit is not None and limit > sys.getrecursionlimit():
        sys.setrecursionlimit(limit)


def get_log_level() -> int:
    name = os.environ.get('GLISP_LOGLEVEL', '').strip().upper()
    if not name:
        return _DEFAULT_LOG_LEVEL
    level = getattr(logging, name, None)
    if isinstance(level, int):
        return level
    return _DEFAULT_LOG_LEVEL


def configure_logging(level: Optional[int] = None) -> None:
    """Configure root logging for embedding scripts; the library never calls this on import."""
    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
