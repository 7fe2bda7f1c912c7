"""Flat-colored triangle rendering for the flock."""

import numpy as np
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import boids as config


class TriangleRenderer:
    """Draws one filled triangle per bird from an (N, 3, 2) array, using a VBO when possible."""

    def __init__(self, num_boids: int, color: tuple = None):
        self.color = color if color is not None else config.COLORS["bird"]
        self.num_vertices = num_boids * 3

        # Vertex data (float32 for GPU)
        self._vertices = np.zeros((self.num_vertices, 2), dtype=np.float32)

        self._vbo_vertices = None
        self._vbo_initialized = False

    def _init_vbo(self):
        """Initialize the VBO for fast GPU rendering."""
        if self._vbo_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbo_initialized = False

    def draw(self, shapes: np.ndarray):
        """Render the given triangles in the current projection."""
        if not self._vbo_initialized:
            self._init_vbo()

        self._vertices[:] = shapes.reshape(self.num_vertices, 2)
        glColor3f(*self.color)
        glEnableClientState(GL_VERTEX_ARRAY)

        if self._vbo_initialized and self._vbo_vertices is not None:
            self._vbo_vertices.set_array(self._vertices)
            self._vbo_vertices.bind()
            glVertexPointer(2, GL_FLOAT, 0, None)
            glDrawArrays(GL_TRIANGLES, 0, self.num_vertices)
            self._vbo_vertices.unbind()
        else:
            glVertexPointer(2, GL_FLOAT, 0, self._vertices)
            glDrawArrays(GL_TRIANGLES, 0, self.num_vertices)

        glDisableClientState(GL_VERTEX_ARRAY)
