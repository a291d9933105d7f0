"""Utility functions and helpers."""

__all__ = [
    "file_utils",
]
