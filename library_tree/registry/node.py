"""Graph node for a tracked unit and its composition edges."""

from __future__ import annotations

from typing import Any, Optional

CYCLE_MARKER = "(…cycle…)"


class Node:
    """
    A tracked unit together with its adjacency lists.

    Edges point from the composing unit to the composed one: when class
    ``Service`` lists mixin ``Loggable`` among its bases, ``Service`` is a
    parent of ``Loggable`` and ``Loggable`` is a child of ``Service``.

    Nodes compare and hash by object identity. The registry guarantees a
    single Node per unit, so identity of the node stands for identity of
    the unit.
    """

    def __init__(self, unit: Any) -> None:
        """
        Initialize a node.

        Args:
            unit: The object being tracked (usually a class)
        """
        self.unit = unit
        self._parents: list[Node] = []
        self._children: list[Node] = []

    @property
    def parents(self) -> list[Node]:
        """Nodes that compose this one."""
        return list(self._parents)

    @property
    def children(self) -> list[Node]:
        """Nodes composed into this one."""
        return list(self._children)

    @property
    def name(self) -> str:
        return self.display_name()

    def display_name(self) -> str:
        """Human readable label for the unit."""
        name = getattr(self.unit, "__name__", None)
        if isinstance(name, str) and name:
            return name
        return repr(self.unit)

    def add_child(self, other: Node) -> None:
        """Add a child node. Adding an existing child is a no-op."""
        if other in self._children:
            return
        self._children.append(other)

    def add_parent(self, other: Node) -> None:
        """Add a parent node. Adding an existing parent is a no-op."""
        if other in self._parents:
            return
        self._parents.append(other)

    def is_root(self) -> bool:
        """Whether no unit composes this one."""
        return not self._parents

    def to_tree(self, visited: Optional[set[int]] = None) -> dict:
        """
        Convert this node and its descendants to nested dictionaries.

        A node that already appears on the path from the starting node is
        emitted as ``{"name": ...}`` without children, which ends the walk
        around a cycle. Every call extends a fresh copy of the path, so a node
        shared by two siblings is expanded under both.

        Args:
            visited: ids of the nodes on the current path

        Returns:
            Dict with ``name`` and ``children`` keys
        """
        visited = set() if visited is None else visited
        if id(self) in visited:
            return {"name": self.name}

        path = visited | {id(self)}
        return {
            "name": self.name,
            "children": [child.to_tree(path) for child in self.children],
        }

    def render(self, indent: int = 0, visited: Optional[set[int]] = None) -> str:
        """
        Render this node and its descendants as an indented bullet list.

        Args:
            indent: Nesting level, two spaces per level
            visited: ids of the nodes on the current path

        Returns:
            One ``* name`` line per node, newline terminated
        """
        visited = set() if visited is None else visited
        pad = "  " * indent
        if id(self) in visited:
            return f"{pad}* {self.name} {CYCLE_MARKER}\n"

        path = visited | {id(self)}
        out = f"{pad}* {self.name}\n"
        for child in self.children:
            out += child.render(indent + 1, path)
        return out

    def __repr__(self) -> str:
        return (
            f"Node({self.name!r}, parents={len(self._parents)}, "
            f"children={len(self._children)})"
        )
