"""Utility modules for reelmeta."""

from .atomic import atomic_write_json

__all__ = ["atomic_write_json"]
