"""Textual commit graph components."""

from gx.ui.git_graph.graph import build_log_graph, render_lanes

__all__ = ["build_log_graph", "render_lanes"]
