from datetime import datetime, timedelta
from typing import Tuple

MIN_STAGE = 1
MAX_STAGE = 7

# Days until the next review for each forgetting-curve stage
STAGE_INTERVALS = {
    1: 1,
    2: 3,
    3: 7,
    4: 14,
    5: 30,
    6: 60,
    7: 120,
}


class ForgettingCurve:
    """
    Seven-stage forgetting curve used to space reviews of a topic.
    Strong recall moves a topic up one stage (longer interval), adequate recall
    holds it, weak recall moves it down one stage.
    """

    @staticmethod
    def next_stage(current_stage: int, understanding: int) -> int:
        """
        Stage reached after a review.

        Args:
            current_stage: Stage before the review (1-7)
            understanding: Self-reported understanding (1-5)

        Returns:
            New stage, always within 1-7
        """
        if understanding >= 4:
            return min(current_stage + 1, MAX_STAGE)
        elif understanding >= 3:
            return current_stage
        else:
            return max(current_stage - 1, MIN_STAGE)

    @staticmethod
    def clamp_stage(stage: int) -> int:
        """Pull an out-of-range stored stage back into 1-7"""
        return max(MIN_STAGE, min(MAX_STAGE, stage))

    @staticmethod
    def interval_for_stage(stage: int) -> int:
        """Interval in days for a stage; unknown stages fall back to stage 1"""
        return STAGE_INTERVALS.get(stage, STAGE_INTERVALS[MIN_STAGE])

    @staticmethod
    def calculate_next_review(
        current_stage: int,
        understanding: int,
        reference_date: datetime
    ) -> Tuple[int, int, datetime]:
        """
        Calculate the stage, interval and due date after a review.

        Returns:
            (new_stage, new_interval_days, next_review_date)
        """
        new_stage = ForgettingCurve.next_stage(current_stage, understanding)
        new_interval = ForgettingCurve.interval_for_stage(new_stage)
        return new_stage, new_interval, reference_date + timedelta(days=new_interval)

    @staticmethod
    def initialize_topic(reference_date: datetime) -> Tuple[int, int, datetime]:
        """
        Initial forgetting-curve state for a newly studied topic.

        Returns:
            (initial_stage, initial_interval_days, next_review_date)
        """
        interval = STAGE_INTERVALS[MIN_STAGE]
        return MIN_STAGE, interval, reference_date + timedelta(days=interval)

    @staticmethod
    def days_overdue(next_review_date: datetime, today: datetime) -> int:
        """Whole days a review is past due (0 when not yet due)"""
        if today < next_review_date:
            return 0
        return (today - next_review_date).days
