from review_scheduler.crud.review_item import (
    ReviewItemStore,
    get_review_items,
    get_due_review_items,
    get_review_item,
    save_review_item,
    update_review_item,
    set_item_completed,
    delete_review_item
)
from review_scheduler.crud.study_log import StudyEventSource, record_study_log, get_study_logs
from review_scheduler.crud.review_session import (
    record_review_session,
    get_review_sessions,
    get_recent_review_sessions
)

__all__ = [
    "ReviewItemStore",
    "get_review_items",
    "get_due_review_items",
    "get_review_item",
    "save_review_item",
    "update_review_item",
    "set_item_completed",
    "delete_review_item",
    "StudyEventSource",
    "record_study_log",
    "get_study_logs",
    "record_review_session",
    "get_review_sessions",
    "get_recent_review_sessions",
]
