"""Registry of tracked units and their composition graph.

This module provides the in-memory store behind library-tree:
- One Node per tracked unit, keyed by object identity
- Idempotent parent -> child edge recording
- Root and full-graph snapshots for rendering
"""

from library_tree.registry.node import CYCLE_MARKER, Node
from library_tree.registry.tracker import (
    Registry,
    RegistryStats,
    get_registry,
    resolve_registry,
)

__all__ = [
    "CYCLE_MARKER",
    "Node",
    "Registry",
    "RegistryStats",
    "get_registry",
    "resolve_registry",
]
