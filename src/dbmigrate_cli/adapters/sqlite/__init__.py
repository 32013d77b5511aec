"""SQLite database adapter."""

from .handle import SQLiteHandle, open_handle

__all__ = ["SQLiteHandle", "open_handle"]
