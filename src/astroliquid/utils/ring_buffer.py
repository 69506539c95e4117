"""
Ring Buffer - Fixed-capacity rolling history of vectors.

Used for the per-synapse rolling buffer of filtered outputs and for the
reservoir's window of recently applied drive vectors. Entries are written to
the current position and the pointer advances; reads address entries by how
many ticks ago they were written.
"""

from __future__ import annotations

import torch
import torch.nn as nn


class RingBuffer(nn.Module):
    """Circular buffer of the last ``capacity`` vectors of length ``size``.

    Memory: O(capacity × size)
    Push/Read: O(1) per operation

    Args:
        capacity: Number of vectors retained
        size: Length of each vector
        device: Torch device
        dtype: Data type of stored values
    """

    def __init__(
        self,
        capacity: int,
        size: int,
        device: str = "cpu",
        dtype: torch.dtype = torch.float64,
    ):
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")

        super().__init__()

        self.capacity = capacity
        self.size = size

        self.register_buffer(
            "buffer",
            torch.zeros((capacity, size), dtype=dtype, device=device),
        )

        # Next write position and number of valid entries
        self.ptr = 0
        self.count = 0

    def push(self, values: torch.Tensor) -> None:
        """Write ``values`` as the newest entry, evicting the oldest when full.

        Raises:
            ValueError: If values.shape[0] != self.size
        """
        if values.shape[0] != self.size:
            raise ValueError(
                f"Vector size mismatch: expected {self.size}, got {values.shape[0]}"
            )
        self.buffer[self.ptr] = values.to(dtype=self.buffer.dtype, device=self.buffer.device)
        self.ptr = (self.ptr + 1) % self.capacity
        self.count = min(self.count + 1, self.capacity)

    def read(self, delay: int) -> torch.Tensor:
        """Read the entry written ``delay`` pushes ago (0 = newest).

        Raises:
            ValueError: If the entry is not (or no longer) in the buffer
        """
        if delay < 0 or delay >= self.count:
            raise ValueError(f"Delay {delay} out of range [0, {self.count - 1}]")
        return self.buffer[(self.ptr - 1 - delay) % self.capacity]

    def recent(self, n: int) -> torch.Tensor:
        """Last ``min(n, count)`` entries stacked oldest-first [n, size]."""
        n = max(0, min(n, self.count))
        indices = torch.tensor(
            [(self.ptr - n + i) % self.capacity for i in range(n)],
            dtype=torch.long,
            device=self.buffer.device,
        )
        return self.buffer.index_select(0, indices)

    def __len__(self) -> int:
        return self.count
