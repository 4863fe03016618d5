"""Constants and default values for vision staircase testing."""

# Staircase rule defaults (2-down/1-up converges on ~70.7% correct)
DEFAULT_CORRECT_STREAK = 2
DEFAULT_INCORRECT_STREAK = 1
DEFAULT_REVERSALS_REQUIRED = 6
DEFAULT_REVERSALS_USED = 4
DEFAULT_MAX_TRIALS = 50
DEFAULT_BOUNDARY_RUN_LENGTH = 5

SCALES = ('linear', 'geometric')

# Per-test level ranges. Lower levels are always harder:
# acuity in logMAR (smaller letters), contrast in log10 Weber contrast.
TEST_PRESETS = {
    'distance_acuity': {
        'min_level': -0.3, 'max_level': 1.0,
        'step_size': 0.1, 'start_level': 0.5,
        'units': 'logMAR',
    },
    'near_acuity': {
        'min_level': -0.2, 'max_level': 1.0,
        'step_size': 0.1, 'start_level': 0.4,
        'units': 'logMAR',
    },
    'contrast_sensitivity': {
        'min_level': -2.25, 'max_level': 0.0,
        'step_size': 0.15, 'start_level': -0.9,
        'units': 'log contrast',
    },
}

# Snellen conversion uses a 6 m test distance
SNELLEN_TEST_DISTANCE = 6

# Simulated observer defaults (4-alternative tumbling E)
DEFAULT_SLOPE = 20.0
DEFAULT_GUESS_RATE = 0.25
DEFAULT_LAPSE_RATE = 0.02

# Decimal places kept when snapping fixed-step levels onto the grid
LEVEL_PRECISION = 10

# Fraction of a step within which a level counts as lying on the grid
GRID_TOLERANCE = 1e-9
