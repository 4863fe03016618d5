"""
Analysis module for staircase results.

This module contains functions for:
- Threshold estimation from reversal levels
- Fallback estimation for sessions stopped early
"""

from .threshold_estimation import ThresholdEstimate, ThresholdEstimator

__all__ = ["ThresholdEstimate", "ThresholdEstimator"]
