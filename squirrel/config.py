from __future__ import annotations
import os


_DEFAULT_MAX_CALL_DEPTH = 1000

_TRUTHY = {"1", "true", "yes", "on"}


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def flag_from_env(var: str) -> bool:
    raw = os.environ.get(var)
    return bool(raw) and raw.strip().lower() in _TRUTHY


def get_max_call_depth() -> int:
    """Maximum number of nested lambda calls before evaluation gives up."""
    return int_from_env('SQUIRREL_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def trace_codegen() -> bool:
    return flag_from_env('SQUIRREL_TRACE_CODEGEN')
