"""File handling and batching utilities."""

import math
from pathlib import Path
from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], chunk_size: int) -> Iterator[List[T]]:
    """Split a sequence into consecutive chunks.

    Args:
        items: Items to split
        chunk_size: Maximum number of items per chunk

    Yields:
        Lists of at most ``chunk_size`` items; only the last may be shorter
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    for start in range(0, len(items), chunk_size):
        yield list(items[start:start + chunk_size])


def count_chunks(n_items: int, chunk_size: int) -> int:
    """Number of chunks ``chunked`` produces for ``n_items`` items."""
    return math.ceil(n_items / chunk_size)


def ensure_output_dir(output_path: Path) -> Path:
    """Ensure output directory exists.

    Args:
        output_path: Path to output directory

    Returns:
        Path object for the created directory
    """
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path
