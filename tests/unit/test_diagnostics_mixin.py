"""Tests for the diagnostics statistics helpers."""

import pytest
import torch

from astroliquid.mixins import DiagnosticsMixin


@pytest.mark.unit
class TestSpikeDiagnostics:
    """Firing statistics over a spike history."""

    def test_mean_amplitude_counts_magnitude_of_emitted_spikes(self):
        spikes = torch.tensor(
            [[1.0, 0.0, -3.0], [0.0, 0.0, 0.0]], dtype=torch.float64
        )
        stats = DiagnosticsMixin.spike_diagnostics(spikes, prefix="excitatory")
        assert stats["excitatory_mean_amplitude"] == pytest.approx(2.0)
        assert stats["excitatory_firing_rate"] == pytest.approx(2 / 6)
        assert stats["excitatory_active_fraction"] == pytest.approx(0.5)
        assert stats["excitatory_total_neurons"] == 2

    def test_silent_history(self):
        stats = DiagnosticsMixin.spike_diagnostics(torch.zeros(3, 4, dtype=torch.float64))
        assert stats["mean_amplitude"] == 0.0
        assert stats["firing_rate"] == 0.0

    def test_empty_history(self):
        stats = DiagnosticsMixin.spike_diagnostics(torch.zeros(3, 0, dtype=torch.float64))
        assert stats["mean_amplitude"] == 0.0
        assert stats["total_neurons"] == 3


@pytest.mark.unit
class TestWeightDiagnostics:
    """Weight statistics and bound occupancy."""

    def test_fraction_at_bounds(self):
        weights = torch.tensor([0.0, 1.0, 5.5, 5.5], dtype=torch.float64)
        stats = DiagnosticsMixin.weight_diagnostics(weights, prefix="EE", w_min=0.0, w_max=5.5)
        assert stats["EE_weight_count"] == 4
        assert stats["EE_weight_at_min"] == pytest.approx(0.25)
        assert stats["EE_weight_at_max"] == pytest.approx(0.5)

    def test_empty(self):
        stats = DiagnosticsMixin.weight_diagnostics(torch.zeros(0), prefix="II")
        assert stats["II_weight_count"] == 0
        assert stats["II_weight_mean"] == 0.0
