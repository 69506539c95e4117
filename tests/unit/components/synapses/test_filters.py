"""Tests for the alpha-function conduction filter."""

import math

import pytest
import torch

from astroliquid.components.synapses import (
    alpha_kernel,
    alpha_synaptic_filter,
    causal_filter_output,
)


@pytest.mark.unit
class TestAlphaFunction:
    """Shape of the impulse response."""

    def test_peak_at_tau(self):
        assert alpha_synaptic_filter(5.0, tau=5.0) == pytest.approx(1.0)

    def test_zero_for_negative_time(self):
        assert alpha_synaptic_filter(-1.0) == 0.0
        values = alpha_synaptic_filter(torch.tensor([-2.0, 0.0, 1.0], dtype=torch.float64))
        assert values[0].item() == 0.0
        assert values[1].item() == 0.0
        assert values[2].item() == pytest.approx(0.2 * math.exp(0.8))

    def test_scalar_and_tensor_agree(self):
        t = torch.arange(0, 12, dtype=torch.float64)
        tensor_values = alpha_synaptic_filter(t, tau=3.0)
        for i, value in enumerate(t.tolist()):
            assert tensor_values[i].item() == pytest.approx(alpha_synaptic_filter(value, tau=3.0))

    def test_kernel_samples_from_one(self):
        kernel = alpha_kernel(length=30, tau=5.0)
        assert kernel.shape == (30,)
        assert kernel.dtype == torch.float64
        assert kernel[0].item() == pytest.approx(alpha_synaptic_filter(1.0, 5.0))
        assert int(torch.argmax(kernel).item()) == 4  # t = 5

    def test_kernel_rises_then_decays(self):
        kernel = alpha_kernel()
        diffs = kernel[1:] - kernel[:-1]
        assert bool((diffs[:4] > 0).all())
        assert bool((diffs[4:] < 0).all())


@pytest.mark.unit
class TestCausalFilterOutput:
    """Newest sample of the causal convolution."""

    def test_newest_spike_uses_first_tap(self):
        kernel = alpha_kernel(length=5)
        history = torch.tensor([[0.0, 0.0, 1.0]], dtype=torch.float64)
        assert causal_filter_output(history, kernel).item() == pytest.approx(kernel[0].item())

    def test_older_spike_uses_later_tap(self):
        kernel = alpha_kernel(length=5)
        history = torch.tensor([[1.0, 0.0, 0.0]], dtype=torch.float64)
        assert causal_filter_output(history, kernel).item() == pytest.approx(kernel[2].item())

    def test_impulse_response_reproduces_kernel(self):
        kernel = alpha_kernel(length=6)
        spikes = [1.0] + [0.0] * 7
        outputs = [
            causal_filter_output(torch.tensor([spikes[: n + 1]], dtype=torch.float64), kernel).item()
            for n in range(len(spikes))
        ]
        assert outputs[:6] == pytest.approx(kernel.tolist())
        assert outputs[6:] == [0.0, 0.0]

    def test_linear_and_signed(self):
        kernel = alpha_kernel(length=4)
        history = torch.tensor(
            [[1.0, 0.0, 1.0], [-1.0, 0.0, -1.0]], dtype=torch.float64
        )
        out = causal_filter_output(history, kernel)
        assert out[0].item() == pytest.approx(kernel[0].item() + kernel[2].item())
        assert out[1].item() == pytest.approx(-out[0].item())

    def test_empty_history(self):
        out = causal_filter_output(torch.zeros(3, 0, dtype=torch.float64), alpha_kernel())
        assert torch.equal(out, torch.zeros(3, dtype=torch.float64))

    def test_history_longer_than_kernel(self):
        kernel = alpha_kernel(length=3)
        history = torch.tensor([[1.0, 1.0, 1.0, 1.0, 1.0]], dtype=torch.float64)
        assert causal_filter_output(history, kernel).item() == pytest.approx(kernel.sum().item())
