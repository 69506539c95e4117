"""Shared utilities."""

from __future__ import annotations

from astroliquid.utils.ring_buffer import RingBuffer

__all__ = ["RingBuffer"]
