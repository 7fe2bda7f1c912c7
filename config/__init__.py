"""Simulation and window settings."""
