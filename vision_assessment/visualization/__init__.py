"""
Visualization module for staircase results and simulations.

This module contains functions for:
- Plotting individual staircase tracks
- Plotting estimate error distributions across simulated observers
- Printing trial logs
"""

from .staircase_plots import plot_estimate_errors, plot_staircase, print_trial_log

__all__ = ["plot_estimate_errors", "plot_staircase", "print_trial_log"]
