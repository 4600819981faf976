"""Telemetry and configuration shared by every layer."""

from . import telemetry
from .config import EditorSettings

__all__ = ["telemetry", "EditorSettings"]
