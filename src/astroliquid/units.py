"""Unit types for dimensional analysis in liquid computations.

Prevents mixing incompatible quantities (drives vs voltages vs weights).
Uses Python's NewType for zero-runtime-cost type checking with mypy/pyright.

Example usage:
    from astroliquid.units import DriveTensor, VoltageTensor

    def integrate(v: VoltageTensor, drive: DriveTensor) -> VoltageTensor:
        ...
"""

from typing import NewType

import torch

# =============================================================================
# TENSOR TYPES
# =============================================================================

VoltageTensor = NewType("VoltageTensor", torch.Tensor)
"""Membrane potentials [n_neurons], in threshold units (θ = 20 by default)."""

DriveTensor = NewType("DriveTensor", torch.Tensor)
"""External or synaptic drive [n_neurons] added to dV/dt."""

SpikeTensor = NewType("SpikeTensor", torch.Tensor)
"""Emitted spike amplitudes [n_neurons]: 0 when silent, ±amplitude when firing."""

WeightTensor = NewType("WeightTensor", torch.Tensor)
"""Synaptic weights [n_synapses]."""

ActivityTensor = NewType("ActivityTensor", torch.Tensor)
"""Astrocyte activity levels [n_astrocytes]."""
