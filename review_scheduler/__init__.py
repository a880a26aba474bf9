from review_scheduler.forgetting_curve import ForgettingCurve, STAGE_INTERVALS
from review_scheduler.priority import PriorityScorer
from review_scheduler.review_schedule import ReviewScheduleGenerator, ReviewCompletionHandler

__all__ = [
    "ForgettingCurve",
    "STAGE_INTERVALS",
    "PriorityScorer",
    "ReviewScheduleGenerator",
    "ReviewCompletionHandler",
]
