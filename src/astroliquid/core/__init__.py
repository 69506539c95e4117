"""Reservoir orchestration and recorded history."""

from __future__ import annotations

from astroliquid.core.history import ReservoirHistory, RunRecorder
from astroliquid.core.reservoir import REST, STIMULUS, LiquidStateMachine

__all__ = [
    "LiquidStateMachine",
    "ReservoirHistory",
    "RunRecorder",
    "REST",
    "STIMULUS",
]
