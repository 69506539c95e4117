"""
Tests for the liquid's LIF neuron population.

Covers the implicit-reset membrane update, refractory gating, spike history
lock-step and drive padding.
"""

import pytest
import torch

from astroliquid.components.neurons import LiquidNeurons, pad_drive
from astroliquid.config import LiquidNeuronConfig
from astroliquid.errors import DimensionMismatchError


def _single_neuron(amplitude: float = 1.0) -> LiquidNeurons:
    positions = torch.zeros(1, 3, dtype=torch.float64)
    return LiquidNeurons(positions, torch.tensor([amplitude], dtype=torch.float64))


def _population(n: int, excitatory_fraction: float = 0.8, seed: int = 0) -> LiquidNeurons:
    positions = torch.arange(n * 3, dtype=torch.float64).reshape(n, 3)
    generator = torch.Generator().manual_seed(seed)
    config = LiquidNeuronConfig(excitatory_fraction=excitatory_fraction)
    return LiquidNeurons.from_positions(positions, config, generator=generator)


@pytest.mark.unit
class TestMembraneDynamics:
    """Single-neuron trajectories with constant drive."""

    def test_strong_drive_scenario(self):
        """Drive 25 with θ = 20, τ = 64: clamp, spike, refractory spike, reset."""
        neuron = _single_neuron()
        drive = torch.tensor([25.0], dtype=torch.float64)

        neuron(1, drive)
        assert neuron.membrane.item() == pytest.approx(21.0)  # clamped at θ + 1
        assert neuron.spike_history[0, 0].item() == 0.0

        neuron(2, drive)
        assert neuron.spike_history[0, 1].item() == 1.0
        assert neuron.membrane.item() == pytest.approx(21.0)

        # Tick 3 is refractory: no input, but V >= θ still fires
        neuron(3, drive)
        assert neuron.spike_history[0, 2].item() == 1.0
        assert neuron.membrane.item() == pytest.approx(21.0 - 21.0 / 64.0 - 20.0)

    def test_monotonic_rise_then_spike(self):
        """A sub-threshold drive charges the membrane until it crosses θ."""
        neuron = _single_neuron()
        drive = torch.tensor([1.0], dtype=torch.float64)

        trajectory = []
        for t in range(1, 101):
            spikes, membrane = neuron(t, drive)
            if spikes.item() != 0.0:
                break
            trajectory.append(membrane.item())
        else:
            pytest.fail("neuron never fired within 100 ticks")

        assert all(b > a for a, b in zip(trajectory, trajectory[1:]))
        assert trajectory[-1] >= 20.0
        assert all(v < 20.0 for v in trajectory[:-1])

        # Reset is implicit: the spike term subtracts θ from the leaky update
        expected = trajectory[-1] + (-trajectory[-1] / 64.0 + 1.0 - 20.0)
        assert neuron.membrane.item() == pytest.approx(expected)

    def test_inhibitory_amplitude_in_history(self):
        neuron = _single_neuron(amplitude=-1.0)
        drive = torch.tensor([25.0], dtype=torch.float64)
        neuron(1, drive)
        spikes, _ = neuron(2, drive)
        assert spikes.item() == -1.0
        assert neuron.latest_spikes().item() == -1.0

    def test_clamp_bounds(self):
        neuron = _single_neuron()
        neuron(1, torch.tensor([-100.0], dtype=torch.float64))
        assert neuron.membrane.item() == pytest.approx(-4.0)
        neuron(2, torch.tensor([1000.0], dtype=torch.float64))
        assert neuron.membrane.item() == pytest.approx(21.0)

    def test_synaptic_input_adds_to_drive(self):
        a = _single_neuron()
        b = _single_neuron()
        a(1, torch.tensor([3.0], dtype=torch.float64))
        b(1, torch.tensor([1.0], dtype=torch.float64), torch.tensor([2.0], dtype=torch.float64))
        assert torch.equal(a.membrane, b.membrane)


@pytest.mark.unit
class TestRefractoryPeriod:
    """Input is gated for refractory_period - 1 ticks after a spike."""

    def test_no_input_on_tick_after_spike(self):
        neuron = _single_neuron()
        drive = torch.tensor([1.0], dtype=torch.float64)

        t = 0
        while True:
            t += 1
            spikes, _ = neuron(t, drive)
            if spikes.item() != 0.0:
                break
        assert neuron.last_spike.item() == float(t)

        v_after_spike = neuron.membrane.item()
        assert v_after_spike < 20.0

        neuron(t + 1, drive)
        # Pure leak: the drive of 1.0 was ignored
        assert neuron.membrane.item() == pytest.approx(v_after_spike * (1.0 - 1.0 / 64.0))

        v_refractory_end = neuron.membrane.item()
        neuron(t + 2, drive)
        assert neuron.membrane.item() == pytest.approx(
            v_refractory_end * (1.0 - 1.0 / 64.0) + 1.0
        )

    def test_never_spiked_is_not_refractory(self):
        neuron = _single_neuron()
        assert neuron.last_spike.item() == float("-inf")
        neuron(1, torch.tensor([5.0], dtype=torch.float64))
        assert neuron.membrane.item() == pytest.approx(5.0)


@pytest.mark.unit
class TestDrivePadding:
    """Drive vectors are padded, never truncated."""

    def test_short_drive_is_zero_padded(self):
        padded = pad_drive(torch.tensor([1.0, 2.0]), 4)
        assert torch.equal(padded, torch.tensor([1.0, 2.0, 0.0, 0.0]))

    def test_exact_drive_unchanged(self):
        drive = torch.tensor([1.0, 2.0, 3.0])
        assert torch.equal(pad_drive(drive, 3), drive)

    def test_long_drive_rejected(self):
        with pytest.raises(DimensionMismatchError, match="3 neurons"):
            pad_drive(torch.ones(5), 3)

    def test_population_pads_drive(self):
        neurons = _population(5)
        neurons(1, torch.tensor([7.0, 7.0], dtype=torch.float64))
        assert neurons.membrane[:2].tolist() == pytest.approx([7.0, 7.0])
        assert neurons.membrane[2:].tolist() == pytest.approx([0.0, 0.0, 0.0])

    def test_population_rejects_long_drive(self):
        neurons = _population(3)
        with pytest.raises(DimensionMismatchError):
            neurons(1, torch.ones(4, dtype=torch.float64))
        assert neurons.history_length == 0

    def test_synaptic_input_shape_checked(self):
        neurons = _population(3)
        with pytest.raises(DimensionMismatchError):
            neurons(1, torch.zeros(3), torch.zeros(2))


@pytest.mark.unit
class TestSpikeHistory:
    """Lock-step history and accessors."""

    def test_lock_step_length(self, n_timesteps):
        neurons = _population(10)
        drive = torch.rand(10, dtype=torch.float64) * 30.0
        for t in range(1, n_timesteps + 1):
            neurons(t, drive)
        assert neurons.history_length == n_timesteps
        assert neurons.spike_history.shape == (10, n_timesteps)

    def test_entries_are_zero_or_amplitude(self):
        neurons = _population(10)
        drive = torch.full((10,), 30.0, dtype=torch.float64)
        for t in range(1, 6):
            neurons(t, drive)
        history = neurons.spike_history
        amplitude = neurons.spike_amplitude[:, None].expand_as(history)
        assert torch.all((history == 0) | (history == amplitude))

    def test_recent_spikes_clipped(self):
        neurons = _population(4)
        assert neurons.recent_spikes(10).shape == (4, 0)
        for t in range(1, 4):
            neurons(t, torch.zeros(4, dtype=torch.float64))
        assert neurons.recent_spikes(10).shape == (4, 3)
        assert neurons.recent_spikes(2).shape == (4, 2)

    def test_spike_train(self):
        neuron = _single_neuron()
        for t in range(1, 4):
            neuron(t, torch.tensor([25.0], dtype=torch.float64))
        assert neuron.spike_train(0).tolist() == [0.0, 1.0, 1.0]

    def test_latest_spikes_before_first_tick(self):
        assert torch.equal(_population(3).latest_spikes(), torch.zeros(3, dtype=torch.float64))


@pytest.mark.unit
class TestPopulation:
    """Cell types and synapse registry."""

    def test_all_excitatory(self):
        neurons = _population(20, excitatory_fraction=1.0)
        assert bool(neurons.is_excitatory.all())

    def test_all_inhibitory(self):
        neurons = _population(20, excitatory_fraction=0.0)
        assert bool(neurons.is_inhibitory.all())

    def test_excitatory_fraction(self):
        neurons = _population(2000, excitatory_fraction=0.8)
        assert neurons.is_excitatory.double().mean().item() == pytest.approx(0.8, abs=0.04)

    def test_synapse_registry(self):
        neurons = _population(3)
        neurons.register_synapses(torch.tensor([0, 0, 1, 2]), torch.tensor([1, 2, 2, 0]))
        assert neurons.out_synapses(0).tolist() == [0, 1]
        assert neurons.in_synapses(2).tolist() == [1, 2]
        assert neurons.out_synapses(2).tolist() == [3]

    def test_amplitude_shape_checked(self):
        with pytest.raises(DimensionMismatchError):
            LiquidNeurons(torch.zeros(3, 3), torch.ones(2))
