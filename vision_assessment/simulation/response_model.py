"""Response model for simulated vision testing."""

import numpy as np
from scipy.special import expit, logit

from ..utils.defaults import DEFAULT_GUESS_RATE, DEFAULT_LAPSE_RATE, DEFAULT_SLOPE


class VisualResponseModel:
    """
    Models the probability of a correct response to a stimulus.

    Levels increase towards easier stimuli (larger letters, higher contrast),
    so the probability of a correct answer rises with ``level - threshold``.
    """

    def __init__(self, slope=DEFAULT_SLOPE, guess_rate=DEFAULT_GUESS_RATE,
                 lapse_rate=DEFAULT_LAPSE_RATE, threshold_probability=0.5):
        """
        Args:
            slope (float): Steepness of the psychometric function per level unit
            guess_rate (float): Chance of a correct answer when the stimulus is
                invisible (0.25 for a four-orientation tumbling E)
            lapse_rate (float): Chance of an error on a clearly visible stimulus
            threshold_probability (float): Point of the underlying sigmoid that
                sits at the true threshold (0-1)
        """
        if not 0 < threshold_probability < 1:
            raise ValueError("threshold_probability must be strictly between 0 and 1")
        if guess_rate + lapse_rate >= 1:
            raise ValueError("guess_rate + lapse_rate must be below 1")

        self.slope = slope
        self.guess_rate = guess_rate
        self.lapse_rate = lapse_rate
        self.threshold_probability = threshold_probability
        self.threshold_bias = logit(threshold_probability) / self.slope

    def get_response_probability(self, stimulus_level, true_threshold):
        """Probability of a correct response at ``stimulus_level``."""
        x = self.slope * (stimulus_level - true_threshold + self.threshold_bias)
        return self.guess_rate + (1 - self.guess_rate - self.lapse_rate) * expit(x)

    def sample_response(self, stimulus_level, true_threshold, random_state=None):
        """Draw a correct/incorrect response."""
        rng = np.random.default_rng(random_state)
        p = self.get_response_probability(stimulus_level, true_threshold)
        return bool(rng.random() < p)
