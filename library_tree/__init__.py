"""library-tree: track how mixins are composed and render the result.

Read access to the tracked forest goes through the functions below. Each
takes an optional ``registry`` and falls back to the process-wide one.
"""

from __future__ import annotations

from typing import Optional

from library_tree.errors import LibraryTreeError, ModuleLoadError
from library_tree.registry import (
    CYCLE_MARKER,
    Node,
    Registry,
    RegistryStats,
    get_registry,
    resolve_registry,
)
from library_tree.reporter import forest_to_tree, render_text
from library_tree.watcher import (
    Watcher,
    compose,
    notify_composition,
    notify_watched,
    watch,
)

__version__ = "0.1.0"


def roots(registry: Optional[Registry] = None) -> list[Node]:
    """Return nodes that no tracked unit composes."""
    return resolve_registry(registry).roots()


def all_nodes(registry: Optional[Registry] = None) -> list[Node]:
    """Return every tracked node."""
    return resolve_registry(registry).all()


nodes = all_nodes


def render(registry: Optional[Registry] = None) -> str:
    """Render the forest as text, one subtree per root."""
    return render_text(roots(registry))


def to_tree(registry: Optional[Registry] = None) -> list[dict]:
    """Export the forest as nested dictionaries, one per root."""
    return forest_to_tree(roots(registry))


def stats(registry: Optional[Registry] = None) -> RegistryStats:
    return resolve_registry(registry).get_stats()


def reset(registry: Optional[Registry] = None) -> None:
    """Forget every tracked unit."""
    resolve_registry(registry).reset()


__all__ = [
    "CYCLE_MARKER",
    "LibraryTreeError",
    "ModuleLoadError",
    "Node",
    "Registry",
    "RegistryStats",
    "Watcher",
    "all_nodes",
    "compose",
    "get_registry",
    "nodes",
    "notify_composition",
    "notify_watched",
    "render",
    "reset",
    "roots",
    "stats",
    "to_tree",
    "watch",
    "__version__",
]
