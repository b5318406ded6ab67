"""Trajectory planning and visualization for a planar three-link robot arm."""

__version__ = "0.1.0"
__all__ = ["cli", "geometry", "graph_search", "optimization", "planner", "visualization"]