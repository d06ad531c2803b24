"""Thread-safe registry of tracked units and their composition edges."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock, RLock
from typing import Any, Optional

from library_tree.registry.node import Node
from library_tree.utils.logging import get_logger

logger = get_logger("registry.tracker")


@dataclass
class RegistryStats:
    """Statistics about the tracked graph."""

    total_nodes: int = 0
    roots: int = 0
    leaves: int = 0
    edges: int = 0

    def to_dict(self) -> dict:
        return {
            "total_nodes": self.total_nodes,
            "roots": self.roots,
            "leaves": self.leaves,
            "edges": self.edges,
        }


class Registry:
    """
    Registry of tracked units keyed by object identity.

    Every public method runs under one lock, including the snapshots taken
    by ``roots()`` and ``all()``. The snapshots hold the live Node objects,
    so a walk over them after the lock is released can see edges recorded
    in the meantime.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self._lock = RLock()

    def _ensure_node(self, unit: Any) -> Node:
        # Caller must hold the lock.
        node = self._nodes.get(id(unit))
        if node is None:
            node = Node(unit)
            self._nodes[id(unit)] = node
            logger.debug("node_created", unit=node.name)
        return node

    def ensure_node(self, unit: Any) -> Node:
        """
        Get the node for a unit, creating it if needed.

        Args:
            unit: Object to track

        Returns:
            The canonical Node for the unit
        """
        with self._lock:
            return self._ensure_node(unit)

    def get(self, unit: Any) -> Optional[Node]:
        """Get the node for a unit without creating one."""
        with self._lock:
            return self._nodes.get(id(unit))

    def is_tracked(self, unit: Any) -> bool:
        """Check if a unit has a node."""
        with self._lock:
            return id(unit) in self._nodes

    def mark_tracked(self, unit: Any) -> None:
        """Start tracking a unit that has no edges yet."""
        with self._lock:
            node = self._ensure_node(unit)
        logger.debug("unit_tracked", unit=node.name)

    def record_edge(self, parent: Any, child: Any) -> None:
        """
        Record that ``child`` was composed into ``parent``.

        Both nodes are created if missing. Recording the same edge again
        changes nothing.

        Args:
            parent: The composing unit
            child: The composed unit
        """
        with self._lock:
            pnode = self._ensure_node(parent)
            cnode = self._ensure_node(child)
            pnode.add_child(cnode)
            cnode.add_parent(pnode)
        logger.debug("edge_recorded", parent=pnode.name, child=cnode.name)

    def roots(self) -> list[Node]:
        """Get all nodes without parents."""
        with self._lock:
            return [node for node in self._nodes.values() if node.is_root()]

    def all(self) -> list[Node]:
        """Get every tracked node."""
        with self._lock:
            return list(self._nodes.values())

    def reset(self) -> None:
        """
        Forget every tracked node.

        The map is replaced, not cleared, and nodes are left untouched, so
        references taken before the reset still describe the old graph.
        """
        with self._lock:
            dropped = len(self._nodes)
            self._nodes = {}
        logger.debug("registry_reset", dropped=dropped)

    def get_stats(self) -> RegistryStats:
        """Get graph statistics."""
        stats = RegistryStats()
        with self._lock:
            for node in self._nodes.values():
                stats.total_nodes += 1
                children = node.children
                if node.is_root():
                    stats.roots += 1
                if not children:
                    stats.leaves += 1
                stats.edges += len(children)
        return stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, unit: Any) -> bool:
        return self.is_tracked(unit)


_default_registry: Optional[Registry] = None
_default_lock = Lock()


def get_registry() -> Registry:
    """
    Get the process-wide registry, creating it on first use.

    Returns:
        The shared Registry instance
    """
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = Registry()
    return _default_registry


def resolve_registry(registry: Optional[Registry] = None) -> Registry:
    """Return ``registry``, or the process-wide one when it is None."""
    if registry is None:
        return get_registry()
    return registry
