"""Example usage of the staircase engine with a simulated observer."""

import matplotlib.pyplot as plt

from vision_assessment.procedures import StaircaseConfig
from vision_assessment.records import AssessmentRecord
from vision_assessment.simulation import VisualResponseModel, run_simulated_session
from vision_assessment.visualization import plot_staircase, print_trial_log


def main():
    # Simulated observer with true thresholds per test
    true_thresholds = {
        'distance_acuity': 0.2,
        'near_acuity': 0.3,
        'contrast_sensitivity': -1.5,
    }
    response_model = VisualResponseModel(slope=20, guess_rate=0.25, lapse_rate=0.02)

    record = AssessmentRecord()
    record.student_info.student_name = 'Example Student'

    for test_name, threshold in true_thresholds.items():
        config = StaircaseConfig.for_test(test_name)
        session = run_simulated_session(config, threshold, response_model, random_state=42)
        estimate = session.get_result()
        record.apply_estimate(test_name, estimate)

        print_trial_log(session.trial_log, session.reversals)
        plot_staircase(session.trial_log, session.reversals, estimate, title=test_name)

    print(record.to_dict()['seeIt'])
    print(f"See it progress: {record.see_it_progress().badge}")
    plt.show()


if __name__ == "__main__":
    main()
