from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (mankai package directory)
_MANKAI_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MANKAI_DIR / 'prelude'
_DEFAULT_MAX_CALL_DEPTH = 100
_DEFAULT_MAX_EVAL_DEPTH = 2000
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_HOST = '127.0.0.1'
_DEFAULT_PORT = 8765


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prelude_roots() -> List[Path]:
    """Packaged prelude dir first, then any user dirs from MANKAI_PRELUDE_PATH."""
    return [_DEFAULT_PRELUDE_DIR] + paths_from_env('MANKAI_PRELUDE_PATH', [])


def get_max_call_depth() -> int:
    # 0 (or a negative value) disables the limit
    return int_from_env('MANKAI_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def get_max_eval_depth() -> int:
    depth = int_from_env('MANKAI_MAX_EVAL_DEPTH', _DEFAULT_MAX_EVAL_DEPTH)
    if depth < 1:
        raise ValueError(f"MANKAI_MAX_EVAL_DEPTH must be positive, got {depth}")
    return depth


def get_log_level() -> str:
    return os.environ.get('MANKAI_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_server_address() -> tuple[str, int]:
    host = os.environ.get('MANKAI_SERVER_HOST', _DEFAULT_HOST)
    return host, int_from_env('MANKAI_SERVER_PORT', _DEFAULT_PORT)
