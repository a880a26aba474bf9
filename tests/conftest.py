"""Shared fixtures: an isolated in-memory database and a fixed clock."""

import os

# Keep the module-level engine off the project database file during tests.
os.environ.setdefault("REVIEW_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("REVIEW_LOG_JSON", "false")

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from review_scheduler.crud import ReviewItemStore, StudyEventSource
from review_scheduler.database import init_db
from review_scheduler.forgetting_curve import ForgettingCurve
from review_scheduler.models import ReviewItem, StudyLog

NOW = datetime(2026, 3, 10, 9, 30)
USER_ID = 1


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store(db):
    return ReviewItemStore(db)


@pytest.fixture
def source(db):
    return StudyEventSource(db)


@pytest.fixture
def make_item(db):
    """Persist a review item with sensible defaults for the given stage"""

    def _make_item(**overrides):
        stage = overrides.pop("forgetting_curve_stage", 1)
        fields = dict(
            user_id=USER_ID,
            subject="Math",
            topic="Algebra",
            last_study_date=NOW - timedelta(days=1),
            review_count=0,
            difficulty=3,
            understanding=3,
            priority=40,
            forgetting_curve_stage=stage,
            interval_days=ForgettingCurve.interval_for_stage(stage),
            is_completed=False,
        )
        fields.update(overrides)
        fields.setdefault(
            "next_review_date",
            fields["last_study_date"] + timedelta(days=fields["interval_days"]),
        )
        item = ReviewItem(**fields)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def make_study_log(db):
    def _make_study_log(subject="Math", topics=("Algebra",), date=None, understanding=3, user_id=USER_ID, study_time=30):
        log = StudyLog(
            user_id=user_id,
            date=date or NOW - timedelta(days=2),
            subject=subject,
            topics=list(topics),
            study_time=study_time,
            understanding=understanding,
        )
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    return _make_study_log
