"""Main application class that ties everything together."""

import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import boids as config
from .input_handler import InputHandler
from rendering import TriangleRenderer
from boids import Flock


class Application:
    """Main application managing the window, frame pacing and drawing."""

    CAPTION_INTERVAL = 30  # Frames between window caption refreshes

    def __init__(
        self,
        num_boids: int = config.BOIDS["count"],
        width: int = config.WINDOW["width"],
        height: int = config.WINDOW["height"],
        fps: int = config.WINDOW["fps"],
        seed: int = None
    ):
        self.width = width
        self.height = height
        self.target_fps = fps

        pygame.init()
        pygame.display.set_mode((width, height), DOUBLEBUF | OPENGL)
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        print("[App] Initializing flock...")
        self.flock = Flock(
            num_boids=num_boids,
            width=width,
            height=height,
            margin=config.BOIDS["margin"],
            seed=seed
        )

        self.input_handler = InputHandler(self.flock)
        self.renderer = TriangleRenderer(self.flock.num_boids)

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self.rendered_frames = 0

        self._setup_gl()
        print("[App] Ready!")

    def _setup_gl(self):
        """Initialize OpenGL settings for 2D drawing in window pixels, y pointing down."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.width, self.height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self):
        """Advance the simulation unless paused."""
        if self.input_handler.should_step():
            self.flock.step()

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)
        self.renderer.draw(self.flock.shapes)

        self.rendered_frames += 1
        if self.rendered_frames % self.CAPTION_INTERVAL == 0:
            state = "  |  PAUSED" if self.input_handler.paused else ""
            pygame.display.set_caption(
                f"{config.WINDOW['title']}  |  Birds: {self.flock.num_boids}  |  "
                f"FPS: {self.fps:.0f}  |  Frame: {self.flock.frame}{state}"
            )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            self.clock.tick(self.target_fps)
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update()
            self._render()

        pygame.quit()
        print(f"[App] Closed after {self.flock.frame} frames")
