"""
Tests for the LIM astrocyte population.

Activity must follow the sign of w · (liquid_rate − input_rate) when leak
and bias are negligible, and both rates must be normalized by the same
window length.
"""

import pytest
import torch

from astroliquid.components.astrocytes import AstrocytePopulation
from astroliquid.components.neurons import LiquidNeurons
from astroliquid.components.synapses import LiquidSynapses
from astroliquid.config import AstrocyteConfig


def _chain(n_neurons: int = 4):
    """Neurons 0 → 1 → ... with one synapse per consecutive pair."""
    neurons = LiquidNeurons(
        torch.zeros(n_neurons, 3, dtype=torch.float64),
        torch.ones(n_neurons, dtype=torch.float64),
    )
    synapses = LiquidSynapses(
        torch.arange(n_neurons - 1),
        torch.arange(1, n_neurons),
        torch.ones(n_neurons - 1, dtype=torch.float64),
    )
    return neurons, synapses


def _fire_first(neurons: LiquidNeurons, t: int) -> None:
    """Tick in which only neuron 0 spikes."""
    membrane = torch.zeros(neurons.n_neurons, dtype=torch.float64)
    membrane[0] = 21.0
    neurons.membrane = membrane
    neurons(t, torch.zeros(neurons.n_neurons, dtype=torch.float64))


def _linked(config: AstrocyteConfig, synapse_index, n_astrocytes: int = 1):
    neurons, synapses = _chain()
    astrocytes = AstrocytePopulation(n_astrocytes, config)
    links = torch.tensor(synapse_index)
    astrocytes.link_astrocyte = torch.zeros(len(synapse_index), dtype=torch.long)
    astrocytes.link_synapse = links
    synapses.register_astrocytes(astrocytes.link_astrocyte, links)
    return neurons, synapses, astrocytes


@pytest.mark.unit
class TestFeedbackSign:
    """dA/dt follows w · (liquid_rate − input_rate)."""

    def test_activity_rises_when_liquid_exceeds_input(self):
        config = AstrocyteConfig(decay_gain=0.0, bias=0.0, input_gain=0.01)
        neurons, synapses, astrocytes = _linked(config, [0])
        window = []

        trajectory = [astrocytes.activity.item()]
        for t in range(1, 11):
            _fire_first(neurons, t)
            window.append(torch.zeros(3, dtype=torch.float64))
            drive_window = torch.stack(window[-5:])
            astrocytes(neurons, synapses, drive_window)
            trajectory.append(astrocytes.activity.item())

        assert all(b > a for a, b in zip(trajectory, trajectory[1:]))

    def test_activity_falls_when_input_exceeds_liquid(self):
        config = AstrocyteConfig(decay_gain=0.0, bias=0.0, input_gain=0.01)
        neurons, synapses, astrocytes = _linked(config, [0])
        drive = torch.ones(3, dtype=torch.float64)

        trajectory = [astrocytes.activity.item()]
        for t in range(1, 6):
            neurons(t, torch.zeros(4, dtype=torch.float64))
            astrocytes(neurons, synapses, drive[None, :])
            trajectory.append(astrocytes.activity.item())

        assert all(b < a for a, b in zip(trajectory, trajectory[1:]))

    def test_single_euler_step(self):
        """With Γ = 1, τ = 1, dt = 1 the old activity is fully replaced."""
        neurons, synapses, astrocytes = _linked(AstrocyteConfig(), [0])
        _fire_first(neurons, 1)
        drive_window = torch.tensor([[1.0, 0.0, 0.0]], dtype=torch.float64)
        liquid_rate, input_rate = astrocytes(neurons, synapses, drive_window)

        assert liquid_rate.item() == pytest.approx(1.0)
        assert float(input_rate) == pytest.approx(1.0)
        assert astrocytes.activity.item() == pytest.approx(0.0)

    def test_bias_and_tau(self):
        config = AstrocyteConfig(
            activity_initial=1.0, tau=4.0, decay_gain=1.0, bias=2.0, input_gain=0.0
        )
        neurons, synapses, astrocytes = _linked(config, [0])
        neurons(1, torch.zeros(4, dtype=torch.float64))
        astrocytes(neurons, synapses, torch.zeros(1, 3, dtype=torch.float64), dt=0.5)
        assert astrocytes.activity.item() == pytest.approx(1.0 + (-1.0 + 2.0) / 4.0 * 0.5)

    def test_no_clamp(self):
        config = AstrocyteConfig(activity_initial=0.0, decay_gain=0.0, input_gain=10.0)
        neurons, synapses, astrocytes = _linked(config, [0])
        neurons(1, torch.zeros(4, dtype=torch.float64))
        astrocytes(neurons, synapses, torch.full((1, 3), 5.0, dtype=torch.float64))
        assert astrocytes.activity.item() == pytest.approx(-150.0)


@pytest.mark.unit
class TestRateNormalization:
    """Both rates are divided by the window length."""

    @pytest.mark.parametrize("window", [1, 3, 7])
    def test_rates_independent_of_window(self, window):
        neurons, synapses, astrocytes = _linked(AstrocyteConfig(), [0, 1])
        for t in range(1, window + 1):
            _fire_first(neurons, t)
        drive_window = torch.ones(window, 3, dtype=torch.float64)

        liquid_rate, input_rate = astrocytes.rates(neurons, synapses, drive_window)
        # Only synapse 0 has a spiking presynaptic neuron
        assert liquid_rate.item() == pytest.approx(1.0)
        assert float(input_rate) == pytest.approx(3.0)

    def test_window_clipped_to_available_history(self):
        neurons, synapses, astrocytes = _linked(AstrocyteConfig(), [0])
        _fire_first(neurons, 1)
        neurons(2, torch.zeros(4, dtype=torch.float64))
        drive_window = torch.zeros(2, 3, dtype=torch.float64)
        liquid_rate, _ = astrocytes.rates(neurons, synapses, drive_window)
        assert liquid_rate.item() == pytest.approx(0.5)

    def test_inhibitory_spikes_count_by_magnitude(self):
        neurons = LiquidNeurons(
            torch.zeros(2, 3, dtype=torch.float64), torch.tensor([-1.0, 1.0], dtype=torch.float64)
        )
        synapses = LiquidSynapses(
            torch.tensor([0]), torch.tensor([1]), torch.ones(1, dtype=torch.float64)
        )
        astrocytes = AstrocytePopulation(1, AstrocyteConfig(synapses_per_astrocyte=1))
        astrocytes.link(synapses)
        _fire_first(neurons, 1)
        liquid_rate, _ = astrocytes.rates(neurons, synapses, torch.zeros(1, 1, dtype=torch.float64))
        assert liquid_rate.item() == pytest.approx(1.0)

    def test_empty_window(self):
        neurons, synapses, astrocytes = _linked(AstrocyteConfig(), [0])
        liquid_rate, input_rate = astrocytes.rates(
            neurons, synapses, torch.zeros(0, 3, dtype=torch.float64)
        )
        assert liquid_rate.tolist() == [0.0]
        assert float(input_rate) == 0.0


@pytest.mark.unit
class TestLinking:
    """Random monitored subsets, registered on both sides."""

    def _population(self, n_astrocytes: int, per_astrocyte: int):
        neurons, synapses = _chain(n_neurons=30)
        astrocytes = AstrocytePopulation(
            n_astrocytes, AstrocyteConfig(synapses_per_astrocyte=per_astrocyte)
        )
        astrocytes.link(synapses, generator=torch.Generator().manual_seed(3))
        return synapses, astrocytes

    def test_subset_size_and_distinct(self):
        synapses, astrocytes = self._population(n_astrocytes=5, per_astrocyte=10)
        for a in range(5):
            linked = astrocytes.linked_synapses(a)
            assert linked.numel() == 10
            assert torch.unique(linked).numel() == 10
            assert bool((linked < synapses.n_synapses).all())

    def test_fewer_synapses_than_requested(self):
        synapses, astrocytes = self._population(n_astrocytes=2, per_astrocyte=100)
        for a in range(2):
            assert sorted(astrocytes.linked_synapses(a).tolist()) == list(range(synapses.n_synapses))

    def test_bidirectional(self):
        synapses, astrocytes = self._population(n_astrocytes=4, per_astrocyte=6)
        for a in range(4):
            for s in astrocytes.linked_synapses(a).tolist():
                assert a in synapses.linked_astrocytes(s).tolist()

    def test_seeded_links(self):
        _, a = self._population(n_astrocytes=3, per_astrocyte=5)
        _, b = self._population(n_astrocytes=3, per_astrocyte=5)
        assert torch.equal(a.link_synapse, b.link_synapse)

    def test_initial_state(self):
        astrocytes = AstrocytePopulation(6)
        assert astrocytes.activity.tolist() == pytest.approx([0.15] * 6)
        assert astrocytes.activity.dtype == torch.float64
        assert torch.equal(astrocytes.get_activity(), astrocytes.activity)
