"""Centralized configurable defaults for trustnet.

All tunable parameters in one place. The ``TRUSTNET_*`` environment
variables are read by ``TrustNetConfig.from_env``.
"""

from __future__ import annotations

# Selection
DEFAULT_THRESHOLD = 0.50  # direct vouches at or above this count as high trust
DEFAULT_CLUSTER_COUNT = 3  # low / medium / high trust tiers
DEFAULT_RANK_TOLERANCE = 0.005  # max distance when mapping a clustered score back to its id

# Propagation
DEFAULT_MAX_ITERATIONS = 200
DEFAULT_DECAY_FACTOR = 0.85  # share of a node's energy passed on per hop
DEFAULT_CONVERGENCE_EPSILON = 0.01  # stop once circulating energy drops below this
DEFAULT_BACKWARD_EDGES = True
BACKWARD_EDGE_WEIGHT = 1.0

# Propagation starts with all energy at the root
INJECTED_ENERGY = 1.0

ENV_PREFIX = "TRUSTNET_"
