from datetime import datetime
from typing import List

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from review_scheduler.errors import SourceError
from review_scheduler.models import StudyLog
from review_scheduler.schemas import StudyLogCreate, StudyRecord

logger = structlog.get_logger(__name__)

def record_study_log(db: Session, study_log: StudyLogCreate) -> StudyLog:
    """Record a study event"""
    db_log = StudyLog(**study_log.model_dump())
    db.add(db_log)
    db.commit()
    db.refresh(db_log)
    return db_log

def get_study_logs(db: Session, user_id: int, start_date: datetime, end_date: datetime) -> List[StudyLog]:
    """Get a user's study events within [start_date, end_date], newest first"""
    return db.query(StudyLog).filter(
        StudyLog.user_id == user_id,
        StudyLog.date >= start_date,
        StudyLog.date <= end_date
    ).order_by(StudyLog.date.desc(), StudyLog.id).all()


class StudyEventSource:
    """Supplies study records from the study log table"""

    def __init__(self, db: Session):
        self.db = db

    def find_study_records(self, user_id: int, start_date: datetime, end_date: datetime) -> List[StudyRecord]:
        try:
            logs = get_study_logs(self.db, user_id, start_date, end_date)
            return [StudyRecord.model_validate(log) for log in logs]
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("study_source_failed", user_id=user_id, error=str(exc))
            raise SourceError(f"could not load study records for user {user_id}: {exc}") from exc
        except ValidationError as exc:
            logger.error("study_record_malformed", user_id=user_id, error=str(exc))
            raise SourceError(f"malformed study record for user {user_id}: {exc}") from exc
