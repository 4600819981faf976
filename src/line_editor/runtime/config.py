"""Editor settings resolved from ``LINE_EDITOR_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_FILENAME = "output.txt"


def _lookup(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _env_int(environ: Mapping[str, str], name: str, fallback: int) -> int:
    value = _lookup(environ, name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_flag(environ: Mapping[str, str], name: str, fallback: bool) -> bool:
    value = _lookup(environ, name)
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Values a front-end needs before it builds a session."""

    default_filename: str = DEFAULT_FILENAME
    case_sensitive: bool = False
    status_rows: int = 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        return cls(
            default_filename=_lookup(env, "DEFAULT_FILENAME") or DEFAULT_FILENAME,
            case_sensitive=_env_flag(env, "CASE_SENSITIVE", False),
            status_rows=max(0, _env_int(env, "STATUS_ROWS", 1)),
        )


__all__ = ["EditorSettings", "DEFAULT_FILENAME"]
