import numpy as np
import pandas as pd
from scipy.stats import truncnorm


def generate_observer_thresholds(n_observers=100, mu=0.1, sd=0.2, data_min=-0.3,
                                 data_max=1.0, seed=None):
    """
    Draws true thresholds for a population of simulated observers from a
    truncated normal distribution.

    Args:
        n_observers (int): Number of observers to generate.
        mu (float): Mean threshold (e.g. logMAR).
        sd (float): Standard deviation of the untruncated distribution.
        data_min (float): Lower truncation bound.
        data_max (float): Upper truncation bound.
        seed (int): Random seed for reproducibility.

    Returns:
        np.ndarray: Thresholds within [data_min, data_max].
    """
    if sd <= 0:
        raise ValueError("sd must be positive")
    if data_min >= data_max:
        raise ValueError("data_min must be below data_max")

    a, b = (data_min - mu) / sd, (data_max - mu) / sd
    thresholds = truncnorm.rvs(a, b, loc=mu, scale=sd, size=n_observers,
                               random_state=np.random.default_rng(seed))
    return np.clip(thresholds, data_min, data_max)


def observers_to_dataframe(thresholds, test_name):
    """
    Wraps generated thresholds in a DataFrame, one row per observer.

    Args:
        thresholds (array-like): True thresholds.
        test_name (str): Name of the vision test they belong to.

    Returns:
        pd.DataFrame: Columns 'observer_id', 'test', 'true_threshold'.
    """
    return pd.DataFrame({
        'observer_id': np.arange(len(thresholds)),
        'test': test_name,
        'true_threshold': np.asarray(thresholds, dtype=float),
    })
