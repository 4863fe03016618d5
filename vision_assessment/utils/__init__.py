"""
Utility module for common constants.

This module contains:
- Default staircase parameters
- Per-test level presets
- Simulated observer defaults
"""

from .defaults import *

