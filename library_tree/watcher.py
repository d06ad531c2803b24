"""Composition hooks that feed the registry.

The registry records whatever it is told. Deciding which composition
events are worth recording happens here: an edge is only sent when the
composed unit is already tracked.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from library_tree.registry.tracker import Registry, get_registry, resolve_registry
from library_tree.utils.logging import get_logger

logger = get_logger("watcher")

T = TypeVar("T")


def notify_watched(unit: Any, registry: Optional[Registry] = None) -> None:
    """Mark a unit as tracked."""
    resolve_registry(registry).mark_tracked(unit)


def notify_composition(
    parent: Any,
    child: Any,
    registry: Optional[Registry] = None,
) -> None:
    """Record that ``child`` was composed into ``parent``."""
    resolve_registry(registry).record_edge(parent, child)


def watch(unit: T, registry: Optional[Registry] = None) -> T:
    """
    Track a unit explicitly.

    Works as a class decorator for classes that cannot inherit from
    ``Watcher``.

    Args:
        unit: Object to track
        registry: Registry to use (default: the process-wide one)

    Returns:
        The unit, unchanged
    """
    notify_watched(unit, registry)
    return unit


def compose(parent: Any, *children: Any, registry: Optional[Registry] = None) -> None:
    """
    Report that ``children`` were composed into ``parent``.

    Only children that are already tracked produce an edge.

    Args:
        parent: The composing unit
        *children: The composed units
        registry: Registry to use (default: the process-wide one)
    """
    registry = resolve_registry(registry)
    for child in children:
        if registry.is_tracked(child):
            notify_composition(parent, child, registry)
        else:
            logger.debug("composition_ignored", parent=_label(parent), child=_label(child))


class Watcher:
    """
    Mixin that opts a class into tracking.

    A class listing ``Watcher`` among its direct bases is watched and is
    tracked from the moment it is created. Any class created later with a
    watched, still tracked class among its direct bases is linked to it,
    whether or not that new class is watched itself. Subclasses of an
    unwatched class are not linked to it, even when it appears in the graph.

        class Loggable(Watcher): ...
        class Service(Loggable): ...   # records Service -> Loggable
        class Api(Service): ...        # records nothing
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry = get_registry()
        if _is_watched(cls):
            notify_watched(cls, registry)
        for base in cls.__bases__:
            if base is Watcher or not _is_watched(base):
                continue
            if registry.is_tracked(base):
                notify_composition(cls, base, registry)


def _is_watched(cls: type) -> bool:
    return Watcher in cls.__bases__


def _label(unit: Any) -> str:
    name = getattr(unit, "__name__", None)
    return name if isinstance(name, str) else repr(unit)
