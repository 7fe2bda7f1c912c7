"""Configuration for 2D Boids flocking simulation."""

WINDOW = {
    "width": 1440,
    "height": 1080,
    "title": "2D Boids",
    "fps": 60,
}

_SIZE = 10

BOIDS = {
    "count": 200,
    "size": _SIZE,
    "margin": 100.0,           # Distance from the edge where birds start turning
    "turn_speed": 0.1,

    # Triangle silhouette
    "nose_length": 5 * _SIZE // 2,
    "half_width": _SIZE,

    # Flocking behavior
    "vicinity_radius": _SIZE * 20.0,      # Neighbors used for cohesion and alignment
    "too_close_radius": _SIZE * 3 / 2,    # Neighbors used for separation
    "repulsion_factor": 0.1,
    "mass_attraction_factor": 0.001,
    "alignment_factor": 0.05,

    # Speed clamp and integration
    "min_speed": 1.0,
    "max_speed": 3.0,
    "step_scale": 2.0,
}

COLORS = {
    "background": (0.96, 0.96, 0.96, 1.0),
    "bird": (0.78, 0.78, 0.78),
}
