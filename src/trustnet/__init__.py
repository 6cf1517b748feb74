"""trustnet - Trust rankings over directed, weighted trust graphs.

Given a root identity and a list of "src trusts dst with weight" statements,
computes which other identities the root should treat as trusted peers:
- First-order detection for graphs made only of direct vouches
- Spreading-activation propagation for transitive trust
- Optimal 1-D clustering to split the ranking into trust tiers
"""

__version__ = "1.0.0"

from .clustering import ClusterResult, ckmeans, cluster
from .config import DEFAULT_CONFIG, TrustNetConfig
from .engine import TrustNet, TrustState
from .exceptions import (
    AreaNotFoundError,
    ConfigException,
    TrustNetException,
    ValidationException,
)
from .first_order import first_order_rankings, is_first_order, is_first_order_graph
from .graph import TrustGraph
from .models import Edge, TrustAssignment
from .propagation import PropagationResult, propagate
from .registry import TrustAreaRegistry
from .selection import select_most_trusted

__all__ = [
    # Engine
    "TrustNet",
    "TrustState",
    "TrustAreaRegistry",
    # Config
    "TrustNetConfig",
    "DEFAULT_CONFIG",
    # Models
    "TrustAssignment",
    "Edge",
    "TrustGraph",
    # Algorithms
    "is_first_order",
    "is_first_order_graph",
    "first_order_rankings",
    "propagate",
    "PropagationResult",
    "ckmeans",
    "cluster",
    "ClusterResult",
    "select_most_trusted",
    # Exceptions
    "TrustNetException",
    "ValidationException",
    "ConfigException",
    "AreaNotFoundError",
]
