"""Plotting-layer package for hockeystick."""

from .visualizer import PaleoVisualizer, plot_paleo

__all__ = ["PaleoVisualizer", "plot_paleo"]
