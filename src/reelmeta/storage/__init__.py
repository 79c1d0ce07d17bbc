"""Result and input storage for reelmeta."""

from .dataset import DatasetWriter, InputStore

__all__ = ["DatasetWriter", "InputStore"]
