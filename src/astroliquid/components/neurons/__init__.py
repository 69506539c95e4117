"""Neuron populations for the liquid."""

from __future__ import annotations

from astroliquid.components.neurons.lif import LiquidNeurons, pad_drive

__all__ = ["LiquidNeurons", "pad_drive"]
