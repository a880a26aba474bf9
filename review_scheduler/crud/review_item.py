from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from review_scheduler.errors import ConcurrentUpdateError, InvalidArgumentError, NotFoundError, StoreError
from review_scheduler.models import ReviewItem

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = {
    "last_study_date",
    "next_review_date",
    "review_count",
    "understanding",
    "priority",
    "forgetting_curve_stage",
    "interval_days",
    "is_completed",
}

def get_review_items(db: Session, user_id: int) -> List[ReviewItem]:
    """Get all review items for a user, most urgent first"""
    return db.query(ReviewItem).filter(
        ReviewItem.user_id == user_id
    ).order_by(ReviewItem.priority.desc(), ReviewItem.id).all()

def get_due_review_items(db: Session, user_id: int, as_of: datetime) -> List[ReviewItem]:
    """Get open review items due on or before the calendar day of as_of"""
    end_of_day = datetime.combine(as_of.date(), time.min) + timedelta(days=1)
    return db.query(ReviewItem).filter(
        ReviewItem.user_id == user_id,
        ReviewItem.next_review_date < end_of_day,
        ReviewItem.is_completed.is_(False)
    ).order_by(ReviewItem.priority.desc(), ReviewItem.id).all()

def get_review_item(db: Session, item_id: int) -> Optional[ReviewItem]:
    """Get review item by ID"""
    return db.query(ReviewItem).filter(ReviewItem.id == item_id).first()

def save_review_item(db: Session, item: ReviewItem) -> ReviewItem:
    """Insert a new review item or persist changes to an existing one"""
    db.add(item)
    db.commit()
    db.refresh(item)
    return item

def update_review_item(
    db: Session,
    item_id: int,
    updates: dict,
    expected_version: Optional[int] = None
) -> ReviewItem:
    """
    Apply a partial update to a review item.

    Args:
        updates: Field name -> new value, limited to UPDATABLE_FIELDS
        expected_version: Version the caller read; a mismatch raises ConcurrentUpdateError
    """
    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidArgumentError(f"cannot update review item fields: {', '.join(sorted(unknown))}")

    item = get_review_item(db, item_id)
    if not item:
        raise NotFoundError("review item", item_id)
    if expected_version is not None and item.version != expected_version:
        raise ConcurrentUpdateError(item_id, expected_version, item.version)

    for key, value in updates.items():
        setattr(item, key, value)
    db.commit()
    db.refresh(item)
    return item

def set_item_completed(db: Session, item_id: int, completed: bool = True) -> ReviewItem:
    """Retire an item from scheduling, or reopen it"""
    return update_review_item(db, item_id, {"is_completed": completed})

def delete_review_item(db: Session, item_id: int) -> None:
    """Delete a review item (administrative)"""
    item = get_review_item(db, item_id)
    if not item:
        raise NotFoundError("review item", item_id)
    db.delete(item)
    db.commit()


class ReviewItemStore:
    """
    Review item persistence backed by a SQLAlchemy session.
    Database failures are rolled back and surfaced as StoreError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _errors(self, operation: str, item_id: Optional[int] = None, expected_version: Optional[int] = None):
        try:
            yield
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("review_item_stale", operation=operation, item_id=item_id, error=str(exc))
            raise ConcurrentUpdateError(item_id, expected_version) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("review_store_failed", operation=operation, error=str(exc))
            raise StoreError(f"{operation} failed: {exc}") from exc

    def find_items_by_user(self, user_id: int) -> List[ReviewItem]:
        with self._errors("find_items_by_user"):
            return get_review_items(self.db, user_id)

    def find_due_items(self, as_of_date: datetime, user_id: int) -> List[ReviewItem]:
        with self._errors("find_due_items"):
            return get_due_review_items(self.db, user_id, as_of_date)

    def find_item_by_id(self, item_id: int) -> Optional[ReviewItem]:
        with self._errors("find_item_by_id"):
            return get_review_item(self.db, item_id)

    def save_item(self, item: ReviewItem) -> ReviewItem:
        with self._errors("save_item"):
            return save_review_item(self.db, item)

    def update_item(self, item_id: int, updates: dict, expected_version: Optional[int] = None) -> ReviewItem:
        with self._errors("update_item", item_id, expected_version):
            return update_review_item(self.db, item_id, updates, expected_version)

    def set_completed(self, item_id: int, completed: bool = True) -> ReviewItem:
        with self._errors("set_completed", item_id):
            return set_item_completed(self.db, item_id, completed)

    def delete_item(self, item_id: int) -> None:
        with self._errors("delete_item", item_id):
            delete_review_item(self.db, item_id)
