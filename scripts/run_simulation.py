#!/usr/bin/env python3
"""
Main simulation script for staircase vision testing.

Runs a population of simulated observers through one preset vision test and
writes their true and estimated thresholds to CSV.
"""

import argparse
import logging
import sys
from pathlib import Path

import matplotlib
import yaml

matplotlib.use('Agg')

from vision_assessment.procedures import StaircaseConfig
from vision_assessment.simulation import (
    VisualResponseModel,
    generate_observer_thresholds,
    observers_to_dataframe,
    simulate_population,
)
from vision_assessment.utils.defaults import TEST_PRESETS
from vision_assessment.visualization import plot_estimate_errors

logger = logging.getLogger(__name__)


def load_config(config_path):
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f)


def run_simulation(config):
    """Run the simulation described by ``config`` and return the results table."""
    sim = config['simulation']
    test_name = sim['test']
    preset = TEST_PRESETS[test_name]
    staircase = StaircaseConfig.for_test(test_name, **config.get('staircase', {}))

    thresholds = generate_observer_thresholds(
        n_observers=sim['n_observers'],
        data_min=preset['min_level'],
        data_max=preset['max_level'],
        seed=sim['seed'],
        **config.get('observers', {}),
    )
    observers = observers_to_dataframe(thresholds, test_name)
    response_model = VisualResponseModel(**config.get('response_model', {}))

    logger.info("Running %d observers on %s", len(observers), test_name)
    return simulate_population(staircase, observers, response_model, seed=sim['seed'])


def main():
    parser = argparse.ArgumentParser(description='Run staircase vision test simulation')
    parser.add_argument('--config', type=str,
                        default='configs/default.yaml',
                        help='Path to configuration file')
    parser.add_argument('--n-observers', type=int,
                        help='Number of observers to simulate')
    parser.add_argument('--test', choices=sorted(TEST_PRESETS),
                        help='Vision test to simulate')
    parser.add_argument('--output', type=str, default='results/simulation.csv',
                        help='CSV file for per-observer results')
    parser.add_argument('--plot', action='store_true',
                        help='Save an error distribution plot next to the CSV')
    parser.add_argument('-v', '--verbose', action='store_true')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        logger.error("Configuration file %s not found", args.config)
        return 1

    # Override with command line arguments
    if args.n_observers:
        config['simulation']['n_observers'] = args.n_observers
    if args.test:
        config['simulation']['test'] = args.test

    results = run_simulation(config)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    results.to_csv(output, index=False)
    logger.info("Wrote %s", output)

    if args.plot:
        fig = plot_estimate_errors(results)
        fig.savefig(output.with_suffix('.png'), dpi=150, bbox_inches='tight')

    print(results.groupby('status')[['error', 'trials']].describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
