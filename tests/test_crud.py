from datetime import timedelta

import pytest

from review_scheduler.crud import (
    delete_review_item,
    get_due_review_items,
    get_recent_review_sessions,
    get_review_items,
    get_review_sessions,
    get_study_logs,
    record_review_session,
    record_study_log,
    set_item_completed,
    update_review_item,
)
from review_scheduler.errors import ConcurrentUpdateError, InvalidArgumentError, NotFoundError
from review_scheduler.schemas import ReviewSessionCreate, StudyLogCreate

from conftest import NOW, USER_ID


def test_record_and_query_study_logs(db):
    record_study_log(db, StudyLogCreate(
        user_id=USER_ID, date=NOW - timedelta(days=1), subject="Math",
        topics=["Algebra", "Fractions"], study_time=45, understanding=4,
    ))
    record_study_log(db, StudyLogCreate(
        user_id=USER_ID, date=NOW - timedelta(days=40), subject="History",
        topics=["Rome"], study_time=30, understanding=2,
    ))

    logs = get_study_logs(db, USER_ID, NOW - timedelta(days=7), NOW)

    assert [log.subject for log in logs] == ["Math"]
    assert logs[0].topics == ["Algebra", "Fractions"]


def test_study_log_schema_rejects_bad_understanding():
    with pytest.raises(ValueError):
        StudyLogCreate(user_id=USER_ID, date=NOW, subject="Math", topics=["Algebra"], study_time=10, understanding=0)


def test_items_listed_by_priority(db, make_item):
    make_item(topic="A", priority=20)
    make_item(topic="B", priority=70)

    assert [item.topic for item in get_review_items(db, USER_ID)] == ["B", "A"]


def test_retire_and_reopen_item(db, make_item):
    item = make_item(next_review_date=NOW - timedelta(days=1))

    set_item_completed(db, item.id, True)
    assert get_due_review_items(db, USER_ID, NOW) == []

    set_item_completed(db, item.id, False)
    assert [due.id for due in get_due_review_items(db, USER_ID, NOW)] == [item.id]


def test_update_rejects_unknown_fields(db, make_item):
    item = make_item()

    with pytest.raises(InvalidArgumentError):
        update_review_item(db, item.id, {"difficulty": 1})


def test_update_checks_expected_version(db, make_item):
    item = make_item()

    with pytest.raises(ConcurrentUpdateError) as excinfo:
        update_review_item(db, item.id, {"priority": 90}, expected_version=item.version + 1)

    assert excinfo.value.actual_version == item.version
    db.refresh(item)
    assert item.priority == 40


def test_update_missing_item(db):
    with pytest.raises(NotFoundError):
        update_review_item(db, 404, {"priority": 1})


def test_delete_review_item(db, make_item):
    item = make_item()

    delete_review_item(db, item.id)

    assert get_review_items(db, USER_ID) == []
    with pytest.raises(NotFoundError):
        delete_review_item(db, item.id)


def test_store_wraps_not_found_on_delete(store):
    with pytest.raises(NotFoundError):
        store.delete_item(12345)


def test_review_sessions(db):
    for days_ago, completed in ((1, 8), (10, 5)):
        record_review_session(db, ReviewSessionCreate(
            user_id=USER_ID,
            session_date=NOW - timedelta(days=days_ago),
            total_items=10,
            completed_items=completed,
            session_duration=25,
            average_understanding=3.5,
        ))

    assert [s.completed_items for s in get_review_sessions(db, USER_ID)] == [8, 5]
    assert [s.completed_items for s in get_recent_review_sessions(db, USER_ID, 7, NOW)] == [8]
    assert get_review_sessions(db, USER_ID + 1) == []


def test_session_schema_rejects_more_completed_than_total():
    with pytest.raises(ValueError, match="cannot exceed"):
        ReviewSessionCreate(
            user_id=USER_ID, session_date=NOW, total_items=3,
            completed_items=4, session_duration=10,
        )
