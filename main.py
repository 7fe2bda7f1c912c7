"""
2D Boids Simulation
===================

A real-time flocking simulation: every bird steers towards the local centre
of mass, matches the local mean heading and backs away from birds that get
too close, turning around near the window edges.

Controls:
    - SPACE: Pause/Resume simulation
    - N: Advance one frame while paused
    - R: Scatter the flock again
    - ESC: Quit

Usage:
    python main.py                         # Defaults from config/boids.py
    python main.py --count 500 --seed 7    # More birds, reproducible start
"""

import argparse

from config import boids as config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="2D Boids flocking simulation")
    parser.add_argument("--count", "-n", type=int, default=config.BOIDS["count"],
                        help=f"Number of birds (default: {config.BOIDS['count']})")
    parser.add_argument("--width", type=int, default=config.WINDOW["width"],
                        help=f"Window width in pixels (default: {config.WINDOW['width']})")
    parser.add_argument("--height", type=int, default=config.WINDOW["height"],
                        help=f"Window height in pixels (default: {config.WINDOW['height']})")
    parser.add_argument("--fps", type=int, default=config.WINDOW["fps"],
                        help=f"Target frames per second (default: {config.WINDOW['fps']})")
    parser.add_argument("--seed", type=int, help="Random seed for the initial placement")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Imported here so --help works without a display
    from core import Application

    app = Application(
        num_boids=args.count,
        width=args.width,
        height=args.height,
        fps=args.fps,
        seed=args.seed
    )
    app.run()


if __name__ == "__main__":
    main()
