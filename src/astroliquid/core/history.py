"""
Reservoir History - Recorded time series of a liquid state machine.

Exactly three buffers, rows indexed by entity and columns by tick:

- ``neuron_membrane``   [n_neurons, T]
- ``synapse_weight``    [n_synapses, T]
- ``astrocyte_activity`` [n_astrocytes, T]

Runs append columns; nothing is overwritten until ``clear()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

import torch

from astroliquid.errors import DimensionMismatchError


@dataclass
class ReservoirHistory:
    """Column-appended recordings of membrane, weight and activity."""

    neuron_membrane: torch.Tensor
    synapse_weight: torch.Tensor
    astrocyte_activity: torch.Tensor

    @classmethod
    def empty(
        cls,
        n_neurons: int,
        n_synapses: int,
        n_astrocytes: int,
        dtype: torch.dtype = torch.float64,
        device: Union[torch.device, str] = "cpu",
    ) -> "ReservoirHistory":
        """History with the right row counts and no columns."""
        return cls(
            neuron_membrane=torch.zeros(n_neurons, 0, dtype=dtype, device=device),
            synapse_weight=torch.zeros(n_synapses, 0, dtype=dtype, device=device),
            astrocyte_activity=torch.zeros(n_astrocytes, 0, dtype=dtype, device=device),
        )

    @property
    def n_ticks(self) -> int:
        """Number of recorded ticks (columns)."""
        return self.neuron_membrane.shape[1]

    def append(
        self,
        neuron_membrane: torch.Tensor,
        synapse_weight: torch.Tensor,
        astrocyte_activity: torch.Tensor,
    ) -> None:
        """Column-concatenate one run's matrices onto the buffers.

        Raises:
            DimensionMismatchError: If row counts or column counts disagree
        """
        if not (
            neuron_membrane.shape[1] == synapse_weight.shape[1] == astrocyte_activity.shape[1]
        ):
            raise DimensionMismatchError(
                f"Recorded runs must have equal tick counts, got "
                f"{neuron_membrane.shape[1]}, {synapse_weight.shape[1]}, "
                f"{astrocyte_activity.shape[1]}"
            )
        runs = (
            ("neuron_membrane", neuron_membrane),
            ("synapse_weight", synapse_weight),
            ("astrocyte_activity", astrocyte_activity),
        )
        # Validate every buffer before writing any, so tick counts stay equal
        for name, run in runs:
            buffer = getattr(self, name)
            if run.shape[0] != buffer.shape[0]:
                raise DimensionMismatchError(
                    f"{name}: expected {buffer.shape[0]} rows, got {run.shape[0]}"
                )
        for name, run in runs:
            buffer = getattr(self, name)
            setattr(self, name, torch.cat([buffer, run.to(buffer)], dim=1))

    def clear(self) -> None:
        """Drop all recorded columns, keeping row counts."""
        self.neuron_membrane = self.neuron_membrane[:, :0]
        self.synapse_weight = self.synapse_weight[:, :0]
        self.astrocyte_activity = self.astrocyte_activity[:, :0]


@dataclass
class RunRecorder:
    """Per-run snapshot lists, stacked into matrices at run end."""

    membrane: List[torch.Tensor] = field(default_factory=list)
    weight: List[torch.Tensor] = field(default_factory=list)
    activity: List[torch.Tensor] = field(default_factory=list)

    def snapshot(
        self, membrane: torch.Tensor, weight: torch.Tensor, activity: torch.Tensor
    ) -> None:
        self.membrane.append(membrane.detach().clone())
        self.weight.append(weight.detach().clone())
        self.activity.append(activity.detach().clone())

    def flush_into(self, history: ReservoirHistory) -> None:
        """Append the recorded ticks onto ``history`` as new columns."""
        if not self.membrane:
            return
        history.append(
            torch.stack(self.membrane, dim=1),
            torch.stack(self.weight, dim=1),
            torch.stack(self.activity, dim=1),
        )
