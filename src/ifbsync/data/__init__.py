"""Local dataset loading."""

from ifbsync.data.loader import DatasetLoader

__all__ = ["DatasetLoader"]
