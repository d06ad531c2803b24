"""Reporter module for rendering the tracked forest."""

from library_tree.reporter.forest import (
    forest_to_tree,
    render_json,
    render_text,
)

__all__ = [
    "forest_to_tree",
    "render_json",
    "render_text",
]
