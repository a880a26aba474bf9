"""Review scheduling: discovering studied topics and completing reviews."""

from datetime import datetime, time, timedelta
from typing import Callable, List, Optional, Set, Tuple

import structlog

from review_scheduler.config import settings
from review_scheduler.errors import InvalidArgumentError, NotFoundError, validate_understanding
from review_scheduler.forgetting_curve import ForgettingCurve
from review_scheduler.models import ReviewItem
from review_scheduler.priority import PriorityScorer
from review_scheduler.schemas import StudyRecord

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


class ReviewScheduleGenerator:
    """
    Builds a user's review schedule.

    Topics found in recent study records that are not tracked yet get a new
    review item; the open items due today are then returned, most urgent first.
    """

    def __init__(
        self,
        store,
        source,
        clock: Clock = datetime.now,
        window_days: Optional[int] = None
    ):
        self.store = store
        self.source = source
        self.clock = clock
        self.window_days = settings.study_window_days if window_days is None else window_days

    def generate_schedule(self, user_id: int) -> List[ReviewItem]:
        now = self.clock()
        records = self.source.find_study_records(user_id, now - timedelta(days=self.window_days), now)
        existing = self.store.find_items_by_user(user_id)

        for record in records:
            validate_understanding(record.understanding)

        tracked: Set[Tuple[int, str, str]] = {(user_id, item.subject, item.topic) for item in existing}
        created = 0
        for record in records:
            for topic in record.topics:
                key = (user_id, record.subject, topic)
                if key in tracked:
                    continue
                self.store.save_item(self.create_review_item(user_id, record, topic))
                tracked.add(key)
                created += 1

        due_items = self.store.find_due_items(start_of_day(now), user_id)
        schedule = sorted(due_items, key=lambda item: item.priority, reverse=True)
        logger.info(
            "review_schedule_generated",
            user_id=user_id,
            study_records=len(records),
            items_created=created,
            items_due=len(schedule),
        )
        return schedule

    @staticmethod
    def create_review_item(user_id: int, record: StudyRecord, topic: str) -> ReviewItem:
        """New review item for a topic first seen in a study record"""
        stage, interval, next_review_date = ForgettingCurve.initialize_topic(reference_date=record.date)
        return ReviewItem(
            user_id=user_id,
            subject=record.subject,
            topic=topic,
            last_study_date=record.date,
            next_review_date=next_review_date,
            review_count=0,
            difficulty=PriorityScorer.estimate_difficulty(record.understanding),
            understanding=record.understanding,
            priority=PriorityScorer.initial_priority(record.understanding),
            forgetting_curve_stage=stage,
            interval_days=interval,
            is_completed=False
        )


class ReviewCompletionHandler:
    """Applies the outcome of a finished review to one review item"""

    def __init__(self, store, clock: Clock = datetime.now):
        self.store = store
        self.clock = clock

    def complete_review(self, item_id: int, understanding: int, study_time: int = 0) -> ReviewItem:
        """
        Move an item along the forgetting curve after a review.

        Args:
            item_id: Review item that was reviewed
            understanding: Self-reported understanding for this review (1-5)
            study_time: Minutes spent; recorded in the log only, it does not
                affect stage, interval or priority

        Raises:
            NotFoundError: No item with item_id exists
            InvalidArgumentError: understanding outside 1-5 or negative study_time
        """
        validate_understanding(understanding)
        if study_time < 0:
            raise InvalidArgumentError(f"study_time must not be negative, got {study_time}")

        item = self.store.find_item_by_id(item_id)
        if item is None:
            raise NotFoundError("review item", item_id)

        now = self.clock()
        previous_stage = item.forgetting_curve_stage
        new_stage, new_interval, next_review_date = ForgettingCurve.calculate_next_review(
            ForgettingCurve.clamp_stage(previous_stage), understanding, reference_date=now
        )
        # Priority is scored against the state before this review
        new_priority = PriorityScorer.updated_priority(item, understanding, now)

        updated = self.store.update_item(
            item_id,
            {
                "last_study_date": now,
                "next_review_date": next_review_date,
                "review_count": item.review_count + 1,
                "understanding": understanding,
                "forgetting_curve_stage": new_stage,
                "interval_days": new_interval,
                "priority": new_priority,
            },
            expected_version=item.version
        )
        logger.info(
            "review_completed",
            item_id=item_id,
            understanding=understanding,
            study_time=study_time,
            stage_from=previous_stage,
            stage_to=new_stage,
            interval_days=new_interval,
            priority=new_priority,
        )
        return updated
