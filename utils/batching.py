"""
Fixed-size partitioning for sequential uploads.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split items into contiguous chunks of `size`.

    Every chunk but the last has exactly `size` items. Order is kept,
    so concatenating the chunks gives back the input.

    Raises:
        ValueError: If size is less than 1
    """
    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")

    return [
        list(items[start:start + size])
        for start in range(0, len(items), size)
    ]
