"""Input handling for keyboard and window events."""

import pygame
from pygame.locals import *

from boids import Flock


class InputHandler:
    """
    Handles keyboard input for simulation control.

    SPACE pauses and resumes, N advances a single frame while paused,
    R scatters the flock again, ESC or closing the window quits.
    """

    def __init__(self, flock: Flock):
        self.flock = flock
        self.paused = False
        self._single_step = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key == K_SPACE:
                self.paused = not self.paused
                print(f"[App] {'Paused' if self.paused else 'Resumed'} at frame {self.flock.frame}")
            elif event.key == K_r:
                self.flock.reset()
                print(f"[App] Flock reset ({self.flock.num_boids:,} birds)")
            elif event.key == K_n and self.paused:
                self._single_step = True

        return True

    def should_step(self) -> bool:
        """Whether the flock advances this frame (consumes a pending single step)."""
        if not self.paused:
            return True
        if self._single_step:
            self._single_step = False
            return True
        return False
