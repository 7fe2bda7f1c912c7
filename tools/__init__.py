"""Command-line tools that run the flock without a window."""
