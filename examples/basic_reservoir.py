#!/usr/bin/env python3
"""
Example: Astrocyte-Regulated Liquid State Machine

Builds a reservoir, alternates "stimulus" and "rest" phases, and prints how
synaptic weights and astrocyte activity evolve across the phases.
"""

import logging

import torch
from astroliquid import AstrocyteConfig, LiquidStateMachine, ReservoirConfig


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Configuration (a smaller liquid than the reference 1000 / 1500)
    config = ReservoirConfig(
        n_input=40,
        n_neurons=300,
        n_astrocytes=200,
        grid_size=(7, 7, 7),
        simulation_length=50,
        astrocyte=AstrocyteConfig(synapses_per_astrocyte=10),
        seed=42,
    )
    print(f"Using device: {config.get_torch_device()}")

    lsm = LiquidStateMachine(config)
    print(f"\nCreated {lsm}")

    # Alternate stimulus and rest
    phases = [("stimulus", 50), ("rest", 50), ("stimulus", 50)]
    print(f"Running protocol: {phases}")
    history = lsm.run_protocol(phases)

    # Analyze results
    print("\n" + "=" * 50)
    print("Results:")
    print("=" * 50)

    boundaries = torch.cumsum(torch.tensor([n for _, n in phases]), dim=0).tolist()
    start = 0
    for (name, _), end in zip(phases, boundaries):
        weights = history.synapse_weight[:, end - 1]
        activity = history.astrocyte_activity[:, start:end]
        spikes = lsm.neurons.spike_history[:, start:end].abs()
        print(f"\nPhase '{name}' (ticks {start + 1}-{end}):")
        print(f"  Mean firing rate: {spikes.mean().item():.4f} spikes/tick")
        print(f"  Mean weight at end: {weights.mean().item():.4f}")
        print(f"  Astrocyte activity: mean={activity.mean().item():.4f}, "
              f"final={activity[:, -1].mean().item():.4f}")
        start = end

    diagnostics = lsm.get_diagnostics()
    print("\nWeights by connection type:")
    for prefix in ("EE", "EI", "IE", "II"):
        print(f"  {prefix}: n={diagnostics[f'{prefix}_weight_count']:5d}  "
              f"mean={diagnostics[f'{prefix}_weight_mean']:.4f}")

    print("\nDone!")


if __name__ == "__main__":
    main()
