"""
Spatial Connectivity - Distance- and cell-type-dependent synapse creation.

For every ordered pair of distinct neurons (pre, post) a synapse is created
with probability

    P = C[type] · exp(-(D / λ)²)

where ``type`` is EE, EI, IE or II (presynaptic letter first) and ``D`` is
the Euclidean distance between the two positions. Probability is
non-increasing in distance for every type.

Initial weights are drawn from a heavy-tailed pool: a folded Gaussian
reflected below ``w_max``, so most synapses start strong and a long tail
starts weak.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

import torch

from astroliquid.config.synapse_config import ConnectivityConfig
from astroliquid.constants import synapse as synapse_constants


class ConnectionType(Enum):
    """Connection class by polarity of (pre, post)."""

    EE = "EE"
    EI = "EI"
    IE = "IE"
    II = "II"

    @classmethod
    def from_polarity(cls, pre_excitatory: bool, post_excitatory: bool) -> "ConnectionType":
        pre = "E" if pre_excitatory else "I"
        post = "E" if post_excitatory else "I"
        return cls(pre + post)

    @property
    def code(self) -> int:
        """Integer code used in tensors: EE=0, EI=1, IE=2, II=3."""
        return _TYPE_ORDER.index(self)


_TYPE_ORDER = (ConnectionType.EE, ConnectionType.EI, ConnectionType.IE, ConnectionType.II)


def connection_codes(pre_excitatory: torch.Tensor, post_excitatory: torch.Tensor) -> torch.Tensor:
    """Integer ``ConnectionType.code`` for each (pre, post) pair (broadcasting)."""
    return 2 * (~pre_excitatory).long() + (~post_excitatory).long()


def type_constants(config: ConnectivityConfig) -> Dict[ConnectionType, float]:
    """Base connection probability per connection type."""
    return {
        ConnectionType.EE: config.c_ee,
        ConnectionType.EI: config.c_ei,
        ConnectionType.IE: config.c_ie,
        ConnectionType.II: config.c_ii,
    }


def connection_probability(
    distance: Union[float, torch.Tensor],
    c: Union[float, torch.Tensor],
    lam: float = synapse_constants.CONNECTION_LAMBDA,
) -> torch.Tensor:
    """Connection probability ``c · exp(-(distance / lam)²)``, clipped to [0, 1].

    Args:
        distance: Euclidean distance(s) between neurons
        c: Base constant(s) for the connection type
        lam: Spatial length constant λ

    Returns:
        Probability tensor, broadcast over ``distance`` and ``c``
    """
    distance = torch.as_tensor(distance, dtype=torch.float64)
    c = torch.as_tensor(c, dtype=torch.float64)
    return (c * torch.exp(-((distance / lam) ** 2))).clamp(0.0, 1.0)


def sample_weight_pool(
    max_weight: float = synapse_constants.W_MAX,
    pool_size: int = synapse_constants.WEIGHT_POOL_SIZE,
    std: float = synapse_constants.WEIGHT_POOL_STD,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """Heavy-tailed pool of initial weights in ``[0, max_weight]``.

    ``x ~ Normal(0, std)`` is folded to ``max_weight - |x|``, rescaled so the
    largest sample equals ``max_weight``, clipped at zero and shuffled.

    Returns:
        Weight samples [pool_size]
    """
    samples = torch.randn(pool_size, generator=generator, dtype=torch.float64) * std
    if max_weight <= 0:
        return torch.zeros(pool_size, dtype=torch.float64)
    weights = max_weight - samples.abs()
    weights = weights / weights.max() * max_weight
    weights = weights.clamp(0.0, max_weight)
    return weights[torch.randperm(pool_size, generator=generator)]


def build_connectivity(
    positions: torch.Tensor,
    spike_amplitude: torch.Tensor,
    config: Optional[ConnectivityConfig] = None,
    max_weight: float = synapse_constants.W_MAX,
    generator: Optional[torch.Generator] = None,
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """Sample the synapse set of a liquid.

    Every ordered pair of distinct neurons is tested once. Sampling happens
    on the CPU in float64 so that a seed yields the same wiring everywhere.

    Args:
        positions: Neuron positions [n_neurons, 3]
        spike_amplitude: Signed amplitude per neuron [n_neurons]; sign gives type
        config: Connection constants and weight-pool parameters
        max_weight: Scale of the initial weight pool
        generator: Random generator

    Returns:
        pre_index: Presynaptic neuron per synapse [n_synapses]
        post_index: Postsynaptic neuron per synapse [n_synapses]
        weight: Initial weight per synapse [n_synapses]

        Synapses are ordered by (pre, post), row-major.
    """
    config = config or ConnectivityConfig()
    positions = positions.detach().to("cpu", torch.float64)
    excitatory = spike_amplitude.detach().to("cpu") > 0
    n_neurons = positions.shape[0]

    constants = type_constants(config)
    c_table = torch.tensor([constants[t] for t in _TYPE_ORDER], dtype=torch.float64)
    c = c_table[connection_codes(excitatory[:, None], excitatory[None, :])]

    distance = torch.cdist(positions, positions)
    probability = connection_probability(distance, c, config.connection_lambda)

    draws = torch.rand(n_neurons, n_neurons, generator=generator, dtype=torch.float64)
    connected = draws < probability
    connected.fill_diagonal_(False)
    pre_index, post_index = torch.nonzero(connected, as_tuple=True)

    pool = sample_weight_pool(
        max_weight, config.weight_pool_size, config.weight_pool_std, generator
    )
    picks = torch.randint(0, pool.shape[0], (pre_index.shape[0],), generator=generator)
    weight = pool[picks]

    return pre_index, post_index, weight
