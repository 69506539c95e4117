"""Plasticity rules."""

from __future__ import annotations

from astroliquid.learning.stdp import AstrocyteModulatedSTDP, compute_stdp_update

__all__ = ["AstrocyteModulatedSTDP", "compute_stdp_update"]
