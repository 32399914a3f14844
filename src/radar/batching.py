# src/radar/batching.py

from typing import Generic, Iterable, Iterator, Tuple, TypeVar

T = TypeVar("T")


class BatchSequence(Generic[T]):
    """
    Fixed-size chunks over a finite sequence.

    Chunks are produced lazily and iteration can be restarted; the last chunk
    may be shorter than `size`.
    """

    def __init__(self, items: Iterable[T], size: int):
        if size < 1:
            raise ValueError(f"batch size must be >= 1, got {size}")
        self._items = tuple(items)
        self.size = size

    def __iter__(self) -> Iterator[Tuple[T, ...]]:
        for start in range(0, len(self._items), self.size):
            yield self._items[start:start + self.size]

    def __len__(self) -> int:
        return -(-len(self._items) // self.size)
