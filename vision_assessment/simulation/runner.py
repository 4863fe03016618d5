"""Drive assessment sessions with simulated observers."""

import logging

import numpy as np
import pandas as pd

from ..procedures.session import AssessmentSession
from .response_model import VisualResponseModel

logger = logging.getLogger(__name__)


def run_simulated_session(config, true_threshold, response_model=None, random_state=None):
    """
    Run one session to completion with a simulated observer.

    Args:
        config (StaircaseConfig): Session configuration
        true_threshold (float): Observer's true threshold on the config's scale
        response_model (VisualResponseModel): Psychometric model; defaults apply if None
        random_state (int or np.random.Generator): Seed for reproducibility

    Returns:
        AssessmentSession: The completed session
    """
    response_model = response_model or VisualResponseModel()
    rng = np.random.default_rng(random_state)
    session = AssessmentSession(config)

    while not session.is_complete():
        level = session.next_stimulus_level()
        correct = response_model.sample_response(level, true_threshold, random_state=rng)
        session.submit_response(correct, level=level)

    return session


def simulate_population(config, observers, response_model=None, seed=None):
    """
    Run one session per observer and tabulate the estimates.

    Args:
        config (StaircaseConfig): Shared session configuration
        observers (pd.DataFrame): Must contain 'observer_id' and 'true_threshold'
        response_model (VisualResponseModel): Shared psychometric model
        seed (int): Base seed; each observer gets an independent stream

    Returns:
        pd.DataFrame: One row per observer with estimate, error and trial count
    """
    seeds = np.random.SeedSequence(seed).spawn(len(observers))
    rows = []
    for child, (_, observer) in zip(seeds, observers.iterrows()):
        session = run_simulated_session(
            config, observer['true_threshold'], response_model, random_state=child)
        estimate = session.get_result()
        rows.append({
            'observer_id': observer['observer_id'],
            'true_threshold': observer['true_threshold'],
            'estimate': estimate.value,
            'error': estimate.value - observer['true_threshold'],
            'variability': estimate.variability,
            'trials': estimate.trials_used,
            'status': estimate.status.value,
        })

    results = pd.DataFrame(rows)
    logger.info("Simulated %d observers: mean |error| %.3f, mean trials %.1f",
                len(results), results['error'].abs().mean(), results['trials'].mean())
    return results
