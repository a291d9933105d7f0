"""Command line interfaces."""

__all__ = [
    "genbank",
    "main",
    "plot",
]
