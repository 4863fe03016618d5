"""Visualization functions for staircase results."""

import matplotlib.pyplot as plt
import seaborn as sns


def plot_staircase(trial_log, reversals=(), estimate=None, ax=None, title="Staircase Track"):
    """
    Plot the presented level per trial, marking correct/incorrect responses
    and reversals, with the threshold estimate as a horizontal line.

    Returns:
        matplotlib.axes.Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    indices = [t.index for t in trial_log]
    levels = [t.level for t in trial_log]
    ax.plot(indices, levels, color='grey', lw=1, zorder=1)

    correct = [t for t in trial_log if t.correct]
    incorrect = [t for t in trial_log if not t.correct]
    ax.scatter([t.index for t in correct], [t.level for t in correct],
               marker='o', color='tab:green', label='Correct', zorder=2)
    ax.scatter([t.index for t in incorrect], [t.level for t in incorrect],
               marker='x', color='tab:red', label='Incorrect', zorder=2)

    if reversals:
        ax.scatter([r.trial_index for r in reversals], [r.level_before for r in reversals],
                   s=150, facecolors='none', edgecolors='k', label='Reversal', zorder=3)

    if estimate is not None:
        ax.axhline(estimate.value, color='tab:blue', linestyle='--',
                   label=f'Estimate {estimate.value:.2f} ({estimate.status.value})')

    ax.set_xlabel('Trial')
    ax.set_ylabel('Stimulus Level')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    return ax


def plot_estimate_errors(results, title="Estimate Error by Termination"):
    """
    Distribution of estimate errors from ``simulate_population`` results.

    Returns:
        matplotlib.figure.Figure
    """
    fig, (ax_err, ax_trials) = plt.subplots(1, 2, figsize=(12, 5))
    sns.histplot(data=results, x='error', hue='status', ax=ax_err, kde=True)
    ax_err.axvline(0, color='k', linestyle='--')
    ax_err.set_xlabel('Estimate - True Threshold')
    sns.scatterplot(data=results, x='true_threshold', y='trials', hue='status', ax=ax_trials)
    ax_trials.set_xlabel('True Threshold')
    ax_trials.set_ylabel('Trials to Termination')
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def print_trial_log(trial_log, reversals=()):
    """Print the trial sequence, one line per trial."""
    reversal_trials = {r.trial_index for r in reversals}
    print("Trial | Level   | Correct | Reversal")
    print("-" * 40)
    for t in trial_log:
        mark = '*' if t.index in reversal_trials else ''
        print(f"{t.index:5d} | {t.level:7.3f} | {str(t.correct):7} | {mark}")
