"""Astrocyte populations."""

from __future__ import annotations

from astroliquid.components.astrocytes.lim import AstrocytePopulation

__all__ = ["AstrocytePopulation"]
