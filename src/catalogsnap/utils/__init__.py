"""Utility helpers for catalogsnap."""

from .freeze import freeze, read_only, thaw

__all__ = ["freeze", "read_only", "thaw"]
