from sqlalchemy.orm import Session
from review_scheduler.models import ReviewSession
from review_scheduler.schemas import ReviewSessionCreate
from datetime import datetime, timedelta
from typing import List

def record_review_session(db: Session, session: ReviewSessionCreate) -> ReviewSession:
    """Record a batch of reviews done together"""
    db_session = ReviewSession(**session.model_dump())
    db.add(db_session)
    db.commit()
    db.refresh(db_session)
    return db_session

def get_review_sessions(db: Session, user_id: int, limit: int = 50) -> List[ReviewSession]:
    """Get a user's review sessions, newest first"""
    return db.query(ReviewSession).filter(
        ReviewSession.user_id == user_id
    ).order_by(ReviewSession.session_date.desc()).limit(limit).all()

def get_recent_review_sessions(db: Session, user_id: int, days: int, now: datetime) -> List[ReviewSession]:
    """Get review sessions from the last `days` days"""
    start_date = now - timedelta(days=days)
    return db.query(ReviewSession).filter(
        ReviewSession.user_id == user_id,
        ReviewSession.session_date >= start_date
    ).order_by(ReviewSession.session_date.desc()).all()
