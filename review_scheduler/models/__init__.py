from review_scheduler.models.review_item import ReviewItem
from review_scheduler.models.review_session import ReviewSession
from review_scheduler.models.study_log import StudyLog

__all__ = [
    "ReviewItem",
    "ReviewSession",
    "StudyLog",
]
