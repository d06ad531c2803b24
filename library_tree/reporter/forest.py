"""Text and JSON rendering for the tracked forest."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Iterable, Optional

from library_tree.registry.node import Node
from library_tree.registry.tracker import RegistryStats


def _ordered(roots: Iterable[Node], sort: bool) -> list[Node]:
    roots = list(roots)
    if sort:
        roots.sort(key=lambda node: node.name)
    return roots


def render_text(roots: Iterable[Node], sort: bool = False) -> str:
    """
    Render every root's subtree as an indented bullet list.

    Each root starts with an empty path, so only a unit revisited along its
    own ancestry is reported as a cycle.

    Args:
        roots: Nodes to start from, rendered in the given order
        sort: Order roots by name first

    Returns:
        Concatenated subtrees, or an empty string when there are no roots
    """
    return "".join(root.render() for root in _ordered(roots, sort))


def forest_to_tree(roots: Iterable[Node], sort: bool = False) -> list[dict]:
    """Convert every root's subtree to nested dictionaries."""
    return [root.to_tree() for root in _ordered(roots, sort)]


def render_json(
    roots: Iterable[Node],
    stats: Optional[RegistryStats] = None,
    sort: bool = False,
) -> str:
    """Render the forest as a JSON string."""
    forest = forest_to_tree(roots, sort=sort)
    output = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "total_roots": len(forest),
    }
    if stats is not None:
        output["stats"] = stats.to_dict()
    output["forest"] = forest
    return json.dumps(output, indent=2, ensure_ascii=False)
