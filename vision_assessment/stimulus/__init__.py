"""
Stimulus module: bounded level scales and step rules.
"""

from .levels import FixedStep, GeometricStep, StimulusLevelModel, make_step_rule

__all__ = ["FixedStep", "GeometricStep", "StimulusLevelModel", "make_step_rule"]
