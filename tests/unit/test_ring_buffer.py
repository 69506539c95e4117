"""
Test the ring buffer used for filtered synapse outputs and drive windows.

Verifies that RingBuffer correctly handles:
- Push/read operations
- Circular wrap-around
- Oldest-first windows clipped to the fill level
- Edge cases
"""

import pytest
import torch

from astroliquid.utils import RingBuffer


def _fill(buffer: RingBuffer, n: int) -> None:
    for t in range(n):
        buffer.push(torch.full((buffer.size,), float(t), dtype=torch.float64))


def test_read_newest():
    """Reading with delay 0 returns the last pushed vector."""
    buffer = RingBuffer(capacity=3, size=2)
    buffer.push(torch.tensor([1.0, 2.0]))
    assert torch.equal(buffer.read(0), torch.tensor([1.0, 2.0], dtype=torch.float64))


def test_wrap_around():
    """After more pushes than capacity only the newest entries remain."""
    buffer = RingBuffer(capacity=3, size=1)
    _fill(buffer, 7)
    assert len(buffer) == 3
    assert buffer.read(0).item() == 6.0
    assert buffer.read(2).item() == 4.0


@pytest.mark.parametrize("n_pushed", [0, 1, 2, 5, 9])
def test_recent_is_oldest_first(n_pushed):
    """recent(n) stacks the last entries in push order, clipped to the fill level."""
    buffer = RingBuffer(capacity=5, size=2)
    _fill(buffer, n_pushed)
    window = buffer.recent(4)

    expected_rows = min(4, n_pushed)
    assert window.shape == (expected_rows, 2)
    expected = torch.arange(n_pushed - expected_rows, n_pushed, dtype=torch.float64)
    assert torch.equal(window[:, 0], expected)


def test_read_out_of_range():
    """Delays beyond the stored history are rejected."""
    buffer = RingBuffer(capacity=4, size=1)
    _fill(buffer, 2)
    with pytest.raises(ValueError, match="out of range"):
        buffer.read(2)
    with pytest.raises(ValueError):
        buffer.read(-1)


def test_size_mismatch():
    buffer = RingBuffer(capacity=2, size=3)
    with pytest.raises(ValueError, match="size mismatch"):
        buffer.push(torch.zeros(4))


def test_invalid_capacity():
    with pytest.raises(ValueError, match="capacity"):
        RingBuffer(capacity=0, size=3)


def test_zero_width_vectors():
    """A buffer of empty vectors still counts pushes."""
    buffer = RingBuffer(capacity=3, size=0)
    buffer.push(torch.zeros(0))
    buffer.push(torch.zeros(0))
    assert len(buffer) == 2
    assert buffer.recent(5).shape == (2, 0)


def test_stored_as_buffer_dtype():
    buffer = RingBuffer(capacity=2, size=2, dtype=torch.float64)
    buffer.push(torch.tensor([1, 2]))
    assert buffer.read(0).dtype == torch.float64
    assert "buffer" in dict(buffer.named_buffers())
