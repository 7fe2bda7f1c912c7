"""
Flock Benchmark
===============

Runs the flock without a window and reports how long each step takes.
The neighbor scan is all-pairs, so step time grows with the square of
the bird count.

Usage:
    python -m tools.benchmark                    # Default bird count, 500 steps
    python -m tools.benchmark --count 2k --steps 200  # 2000 birds
    python -m tools.benchmark --seed 1 --sweep 100,200,400,800
"""

import argparse
import time
import numpy as np

from boids import Flock
from config import boids as config


def parse_number(value: str) -> int:
    """Parse number with optional suffix (k, m, K, M)."""
    value = value.strip().lower()
    multipliers = {'k': 1_000, 'm': 1_000_000}

    for suffix, mult in multipliers.items():
        if value.endswith(suffix):
            return int(float(value[:-1]) * mult)

    return int(value)


def format_time(seconds: float) -> str:
    """Format a step duration, in microseconds or milliseconds below one second."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}us"
    if seconds < 1.0:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


def run_benchmark(num_boids: int, steps: int, seed: int = None, warmup: int = 5) -> dict:
    """
    Time ``steps`` flock steps after ``warmup`` untimed ones.

    Returns:
        Dict with num_boids, steps, total, mean, min, max (seconds per step)
        and steps_per_second
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    flock = Flock(num_boids=num_boids, seed=seed)
    for _ in range(warmup):
        flock.step()

    durations = np.zeros(steps, dtype=np.float64)
    for k in range(steps):
        start = time.perf_counter()
        flock.step()
        durations[k] = time.perf_counter() - start

    total = float(durations.sum())
    return {
        "num_boids": flock.num_boids,
        "steps": steps,
        "total": total,
        "mean": total / steps,
        "min": float(durations.min()),
        "max": float(durations.max()),
        "steps_per_second": steps / total if total > 0 else float("inf"),
    }


def print_result(result: dict):
    print(f"[Bench] {result['num_boids']:,} birds x {result['steps']} steps: "
          f"mean {format_time(result['mean'])}, "
          f"min {format_time(result['min'])}, "
          f"max {format_time(result['max'])} "
          f"({result['steps_per_second']:.0f} steps/s)")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Headless flock step timing")
    parser.add_argument("--count", "-n", type=str, default=str(config.BOIDS["count"]),
                        help="Number of birds (e.g., 200, 2k)")
    parser.add_argument("--steps", "-s", type=int, default=500, help="Timed steps per run")
    parser.add_argument("--warmup", type=int, default=5, help="Untimed steps before timing")
    parser.add_argument("--seed", type=int, help="Random seed for the initial placement")
    parser.add_argument("--sweep", type=str,
                        help="Comma-separated bird counts to time in turn (overrides --count)")
    args = parser.parse_args(argv)

    if args.sweep:
        counts = [parse_number(v) for v in args.sweep.split(",") if v.strip()]
    else:
        counts = [parse_number(args.count)]

    results = []
    for count in counts:
        result = run_benchmark(count, args.steps, seed=args.seed, warmup=args.warmup)
        print_result(result)
        results.append(result)
    return results


if __name__ == "__main__":
    main()
