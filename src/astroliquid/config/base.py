"""
Base Configuration Classes.

All astroliquid configs inherit the device/dtype/seed triple from
``BaseConfig``. Simulation state is float64 by default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import torch

from astroliquid.errors import ConfigurationError


@dataclass
class BaseConfig:
    """Base configuration with common fields for all components.

    - device: Hardware device (cpu/cuda)
    - dtype: Tensor data type
    - seed: Random seed for reproducibility
    """

    device: str = "cpu"
    """Device to run on: 'cpu', 'cuda', 'cuda:0', etc."""

    dtype: str = "float64"
    """Data type for state tensors: 'float64' or 'float32'."""

    seed: Optional[int] = None
    """Random seed for reproducible construction. None = nondeterministic."""

    def get_torch_device(self) -> torch.device:
        """Get PyTorch device object."""
        return torch.device(self.device)

    def get_torch_dtype(self) -> torch.dtype:
        """Get PyTorch dtype object."""
        dtype_map = {
            "float64": torch.float64,
            "float32": torch.float32,
        }
        if self.dtype not in dtype_map:
            raise ConfigurationError(
                f"Unknown dtype '{self.dtype}'. "
                f"Choose from: {list(dtype_map.keys())}"
            )
        return dtype_map[self.dtype]

    def make_generator(self) -> torch.Generator:
        """Create a CPU random generator seeded from ``seed``.

        Construction-time sampling always happens on the CPU so that a given
        seed yields the same reservoir on every device.
        """
        generator = torch.Generator()
        if self.seed is None:
            generator.seed()
        else:
            generator.manual_seed(self.seed)
        return generator
