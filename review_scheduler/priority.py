from datetime import datetime


MIN_PRIORITY = 0
MAX_PRIORITY = 100
INITIAL_PRIORITY_FLOOR = 10


def _clamp(value, low, high):
    return max(low, min(high, value))


class PriorityScorer:
    """Urgency scores (0-100) used to order due review items"""

    @staticmethod
    def initial_priority(understanding: int) -> int:
        """Priority for a new item; low understanding means high urgency"""
        return _clamp((5 - understanding) * 20, INITIAL_PRIORITY_FLOOR, MAX_PRIORITY)

    @staticmethod
    def estimate_difficulty(understanding: int) -> int:
        """Difficulty (1-5) as the inverse of the first observed understanding"""
        return _clamp(6 - understanding, 1, 5)

    @staticmethod
    def updated_priority(item, understanding: int, now: datetime) -> int:
        """
        Priority after a review, computed from the item's pre-review state.

        Every adjustment is added before the single final clamp.

        Args:
            item: Object with priority, review_count, interval_days, last_study_date
            understanding: Understanding reported for this review (1-5)
            now: Completion time
        """
        priority = item.priority

        # Recall quality
        if understanding < 3:
            priority += 20
        elif understanding >= 4:
            priority -= 10

        # Young items need reinforcement
        if item.review_count == 0:
            priority += 15
        elif item.review_count == 1:
            priority += 10

        # Overdue reviews
        days_since_last_study = (now - item.last_study_date).days
        if days_since_last_study > item.interval_days * 1.5:
            priority += 25
        elif days_since_last_study > item.interval_days:
            priority += 15

        return int(round(_clamp(priority, MIN_PRIORITY, MAX_PRIORITY)))
