"""
Simulation module for in-silico vision testing.

This module contains functions and classes for:
- Simulating observer responses with a psychometric function
- Generating populations of observer thresholds
- Running sessions end to end with simulated observers
"""

from .observer_gen import generate_observer_thresholds, observers_to_dataframe
from .response_model import VisualResponseModel
from .runner import run_simulated_session, simulate_population

__all__ = [
    "generate_observer_thresholds",
    "observers_to_dataframe",
    "VisualResponseModel",
    "run_simulated_session",
    "simulate_population",
]
