"""
Liquid State Machine - Orchestrator of neurons, synapses and astrocytes.

One tick runs three stages in a fixed order, each with the same ``dt`` and
the same drive vector:

1. Neurons integrate the drive plus the synaptic currents of the previous
   tick and emit spikes.
2. Synapses filter the presynaptic spike history into new currents and
   apply STDP, with depression scaled by the previous tick's astrocyte
   activity.
3. Astrocytes compare windowed liquid spiking with the windowed drive and
   update their activity.

Each stage is a vectorized update that reads all of its inputs before it
writes, so no entity observes a sibling's same-tick state.

Time is derived, not stored: the neurons' shared spike-history length is the
number of ticks simulated so far, and tick ``k`` of the next run has global
time ``history_length + k``. Successive runs therefore continue where the
previous one stopped, keeping plasticity and astrocyte state.

Usage:
    config = ReservoirConfig(n_neurons=200, n_astrocytes=50, seed=42)
    lsm = LiquidStateMachine(config)
    lsm.simulate_with_history("stimulus")
    lsm.simulate_with_history("rest")
    weights = lsm.history.synapse_weight  # [n_synapses, 250]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import torch
import torch.nn as nn

from astroliquid.components.astrocytes.lim import AstrocytePopulation
from astroliquid.components.neurons.lif import LiquidNeurons, pad_drive
from astroliquid.components.synapses.connectivity import ConnectionType
from astroliquid.components.synapses.synapse import LiquidSynapses
from astroliquid.config.reservoir_config import ReservoirConfig
from astroliquid.core.history import ReservoirHistory, RunRecorder
from astroliquid.errors import ConfigurationError
from astroliquid.geometry.grids import generate_grid
from astroliquid.mixins.diagnostics_mixin import DiagnosticsMixin
from astroliquid.stimuli.base import StimulusPattern
from astroliquid.stimuli.bernoulli import BernoulliStimulus
from astroliquid.units import SpikeTensor

logger = logging.getLogger(__name__)

StimulusLike = Union[StimulusPattern, Callable[[int], Any]]

STIMULUS = "stimulus"
REST = "rest"


class LiquidStateMachine(DiagnosticsMixin, nn.Module):
    """Astrocyte-regulated spiking reservoir.

    Args:
        config: Construction parameters. None = reference configuration
        stimulus: Generator for the "stimulus" condition.
            None = Bernoulli(config.stimulus_probability) over n_input channels
        rest: Generator for the "rest" condition.
            None = Bernoulli(config.rest_probability) over n_input channels

    Raises:
        ConfigurationError: Unknown grid type, or the grid has fewer unique
            positions than ``n_neurons``. Raised before any population exists.
    """

    def __init__(
        self,
        config: Optional[ReservoirConfig] = None,
        stimulus: Optional[StimulusLike] = None,
        rest: Optional[StimulusLike] = None,
    ):
        super().__init__()
        self.config = config or ReservoirConfig()
        cfg = self.config

        # Validate geometry before anything is built
        grid = generate_grid(cfg.grid_type, cfg.grid_size, cfg.grid_spacing)
        if grid.shape[0] < cfg.n_neurons:
            raise ConfigurationError(
                f"Grid '{cfg.grid_type.value}' has {grid.shape[0]} unique positions, "
                f"fewer than n_neurons={cfg.n_neurons}"
            )

        device = cfg.get_torch_device()
        dtype = cfg.get_torch_dtype()
        generator = cfg.make_generator()

        # Random placement: shuffle the grid and keep the first n_neurons points
        order = torch.randperm(grid.shape[0], generator=generator)[: cfg.n_neurons]
        positions = grid[order].to(device)

        self.neurons = LiquidNeurons.from_positions(
            positions, cfg.neuron, generator=generator, dtype=dtype
        )
        self.synapses = LiquidSynapses.connect(
            self.neurons,
            config=cfg.synapse,
            connectivity=cfg.connectivity,
            stdp_config=cfg.stdp,
            generator=generator,
        )
        self.astrocytes = AstrocytePopulation(
            cfg.n_astrocytes, cfg.astrocyte, dtype=dtype, device=device
        )
        self.astrocytes.link(self.synapses, generator=generator)

        self.stimuli: Dict[str, StimulusLike] = {
            STIMULUS: stimulus if stimulus is not None else self._default_stimulus(
                cfg.stimulus_probability, generator
            ),
            REST: rest if rest is not None else self._default_stimulus(
                cfg.rest_probability, generator
            ),
        }

        self.history = ReservoirHistory.empty(
            self.n_neurons, self.n_synapses, self.n_astrocytes, dtype=dtype, device=device
        )

        logger.info(
            f"Built liquid: {self.n_neurons} neurons "
            f"({int(self.neurons.is_excitatory.sum().item())} excitatory), "
            f"{self.n_synapses} synapses, {self.n_astrocytes} astrocytes, "
            f"grid={cfg.grid_type.value}"
        )

    def _default_stimulus(self, probability: float, generator: torch.Generator) -> BernoulliStimulus:
        seed = int(torch.randint(0, 2**31 - 1, (1,), generator=generator).item())
        return BernoulliStimulus(
            probability,
            self.config.n_input,
            seed=seed,
            dtype=self.config.get_torch_dtype(),
            device=self.config.get_torch_device(),
        )

    # =========================================================================
    # SIZES AND TIME
    # =========================================================================

    @property
    def n_neurons(self) -> int:
        return self.neurons.n_neurons

    @property
    def n_synapses(self) -> int:
        return self.synapses.n_synapses

    @property
    def n_astrocytes(self) -> int:
        return self.astrocytes.n_astrocytes

    @property
    def time_offset(self) -> int:
        """Ticks simulated so far; the next run starts at ``time_offset + 1``."""
        return self.neurons.history_length

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def resolve_stimulus(self, stimulus: Union[str, StimulusLike, None]) -> StimulusLike:
        """Map a condition name (or None = "rest") to its generator."""
        if stimulus is None:
            stimulus = REST
        if isinstance(stimulus, str):
            if stimulus not in self.stimuli:
                raise ConfigurationError(
                    f"Unknown stimulus condition '{stimulus}'. "
                    f"Choose from: {sorted(self.stimuli)}"
                )
            return self.stimuli[stimulus]
        return stimulus

    def _applied_drive(self, drive: Any) -> torch.Tensor:
        """Drive as a float tensor on the liquid's device, zero-padded to n_neurons."""
        return pad_drive(torch.as_tensor(drive).to(self.neurons.membrane), self.n_neurons)

    def step(
        self,
        global_time: int,
        drive: torch.Tensor,
        dt: Optional[float] = None,
        drive_window: Optional[torch.Tensor] = None,
    ) -> SpikeTensor:
        """Advance the liquid by one tick.

        Args:
            global_time: Absolute tick index
            drive: External drive [n <= n_neurons]; shorter vectors are zero-padded
            dt: Euler step. None = ``config.dt``
            drive_window: Drive vectors of the astrocyte averaging window
                ending at this tick [w, n_neurons], oldest first.
                None = this tick's drive only

        Returns:
            Spikes emitted on this tick [n_neurons]

        Raises:
            DimensionMismatchError: If the drive has more entries than neurons
        """
        dt = self.config.dt if dt is None else dt
        drive = self._applied_drive(drive)
        if drive_window is None:
            drive_window = drive[None, :]

        # Stage 1: neurons read the previous tick's synaptic currents
        synaptic_input = self.synapses.postsynaptic_input(self.n_neurons)
        spikes, _ = self.neurons(global_time, drive, synaptic_input, dt)

        # Stage 2: synapses read this tick's spikes and the previous tick's
        # astrocyte activity
        activity = self.astrocytes.activity if self.n_astrocytes > 0 else None
        self.synapses(self.neurons, activity, dt)

        # Stage 3: astrocytes read the drive window ending at this tick
        self.astrocytes(self.neurons, self.synapses, drive_window, dt)

        return spikes

    def simulate(
        self,
        stimulus: Union[str, StimulusLike, None] = None,
        dt: Optional[float] = None,
        n_steps: Optional[int] = None,
        record: bool = False,
    ) -> torch.Tensor:
        """Run the liquid, resuming from the current global time.

        Args:
            stimulus: Condition name ("stimulus" / "rest"), a generator
                ``global_time -> drive``, or None for "rest"
            dt: Euler step. None = ``config.dt``
            n_steps: Ticks to run. None = ``config.simulation_length``
            record: Snapshot membrane, weight and activity after every tick
                and append them to ``history`` when the run completes

        Returns:
            Spike history of this run [n_neurons, n_steps]

        The astrocyte averaging window is evaluated with this run's generator
        over the last ``astro_t_avg`` ticks, clipped at simulation start, so a
        condition switch takes effect on the window immediately.

        Any exception raised during a tick aborts the run; recorded columns
        of an aborted run are not appended.
        """
        generator = self.resolve_stimulus(stimulus)
        dt = self.config.dt if dt is None else dt
        n_steps = self.config.simulation_length if n_steps is None else n_steps
        if n_steps < 0:
            raise ConfigurationError(f"n_steps must be >= 0, got {n_steps}")

        offset = self.time_offset
        recorder = RunRecorder() if record else None
        level = logging.INFO if record else logging.DEBUG

        window_length = self.config.astro_t_avg
        window: List[torch.Tensor] = []
        if n_steps > 0:
            # Ticks before this run that fall inside the first tick's window
            first = max(offset + 2 - window_length, 1)
            window = [self._applied_drive(generator(t)) for t in range(first, offset + 1)]

        for k in range(1, n_steps + 1):
            global_time = offset + k
            drive = self._applied_drive(generator(global_time))
            window = (window + [drive])[-window_length:]
            self.step(global_time, drive, dt, drive_window=torch.stack(window))

            if recorder is not None:
                recorder.snapshot(
                    self.neurons.membrane, self.synapses.weight, self.astrocytes.activity
                )

            if logger.isEnabledFor(level):
                activity = self.astrocytes.activity
                mean_activity = activity.mean().item() if activity.numel() else float("nan")
                logger.log(
                    level,
                    f"Tick {global_time}: astrocyte activity mean={mean_activity:.6f}",
                )

        if recorder is not None:
            recorder.flush_into(self.history)

        return self.neurons.spike_history[:, offset:]

    def simulate_with_history(
        self,
        stimulus: Union[str, StimulusLike, None] = None,
        dt: Optional[float] = None,
        n_steps: Optional[int] = None,
    ) -> torch.Tensor:
        """``simulate`` with per-tick recording into ``history``."""
        return self.simulate(stimulus, dt=dt, n_steps=n_steps, record=True)

    def run_protocol(
        self,
        phases: Sequence[Tuple[Union[str, StimulusLike], int]],
        dt: Optional[float] = None,
    ) -> ReservoirHistory:
        """Run consecutive recorded phases, e.g. ``[("stimulus", 50), ("rest", 50)]``.

        Returns:
            The reservoir history after the last phase
        """
        for stimulus, n_steps in phases:
            name = stimulus if isinstance(stimulus, str) else type(stimulus).__name__
            logger.info(f"Protocol phase '{name}' for {n_steps} ticks from t={self.time_offset + 1}")
            self.simulate_with_history(stimulus, dt=dt, n_steps=n_steps)
        return self.history

    def reset_history(self) -> None:
        """Clear the recorded history. Live neuron, synapse and astrocyte state is kept."""
        self.history.clear()

    # =========================================================================
    # DIAGNOSTICS
    # =========================================================================

    def get_diagnostics(self) -> Dict[str, Any]:
        """Summary statistics of the current liquid state.

        Returns:
            Flat dict with the global time, weight statistics per connection
            type, firing statistics of excitatory and inhibitory neurons,
            STDP trace statistics and astrocyte activity statistics
        """
        diagnostics: Dict[str, Any] = {
            "time": self.time_offset,
            "n_neurons": self.n_neurons,
            "n_synapses": self.n_synapses,
            "n_astrocytes": self.n_astrocytes,
        }

        syn_cfg = self.synapses.config
        diagnostics.update(
            self.weight_diagnostics(self.synapses.weight, w_min=syn_cfg.w_min, w_max=syn_cfg.w_max)
        )
        codes = self.synapses.connection_types(self.neurons)
        for connection_type in ConnectionType:
            mask = codes == connection_type.code
            diagnostics.update(
                self.weight_diagnostics(self.synapses.weight[mask], prefix=connection_type.value)
            )

        history = self.neurons.spike_history
        diagnostics.update(
            self.spike_diagnostics(history[self.neurons.is_excitatory], prefix="excitatory")
        )
        diagnostics.update(
            self.spike_diagnostics(history[self.neurons.is_inhibitory], prefix="inhibitory")
        )

        diagnostics.update(self.trace_diagnostics(self.synapses.trace_pre, prefix="trace_pre"))
        diagnostics.update(self.trace_diagnostics(self.synapses.trace_post, prefix="trace_post"))
        diagnostics.update(
            self.trace_diagnostics(self.astrocytes.activity, prefix="astrocyte_activity")
        )
        if self.n_astrocytes > 0:
            diagnostics["astrocyte_activity_min"] = self.astrocytes.activity.min().item()

        return diagnostics

    def __repr__(self) -> str:
        return (
            f"LiquidStateMachine(n_neurons={self.n_neurons}, n_synapses={self.n_synapses}, "
            f"n_astrocytes={self.n_astrocytes}, time={self.time_offset})"
        )
