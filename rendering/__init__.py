"""Rendering components for the 2D boids simulation."""

from .triangles import TriangleRenderer

__all__ = ["TriangleRenderer"]
