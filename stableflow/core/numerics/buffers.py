import numpy as np

class BufferPair:
    """
    Current/previous storage for one field.

    "previous" is the input slot of a step and the place where sources are
    injected; "current" is the output slot. swap() exchanges the two array
    references and never touches their contents.
    """

    __slots__ = ("current", "previous")

    def __init__(self, current: np.ndarray, previous: np.ndarray):
        if current.shape != previous.shape:
            raise ValueError(
                f"Buffer shapes differ: {current.shape} vs {previous.shape}"
            )
        self.current = current
        self.previous = previous

    @classmethod
    def zeros(cls, length: int, dtype=np.float32) -> "BufferPair":
        """Allocate a pair of zeroed flat buffers"""
        return cls(np.zeros(length, dtype=dtype), np.zeros(length, dtype=dtype))

    def swap(self):
        """Exchange current and previous in O(1)"""
        self.current, self.previous = self.previous, self.current

    def __len__(self) -> int:
        return len(self.current)

    def __repr__(self) -> str:
        return f"BufferPair(length={len(self.current)}, dtype={self.current.dtype})"
