from sqlalchemy import Column, Integer, Float, DateTime
from datetime import datetime
from review_scheduler.database import Base

class ReviewSession(Base):
    """Aggregate record of a batch of reviews done together (reporting only)"""
    __tablename__ = "review_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    session_date = Column(DateTime, nullable=False)
    total_items = Column(Integer, nullable=False)
    completed_items = Column(Integer, nullable=False, default=0)
    session_duration = Column(Integer, nullable=False)  # minutes
    average_understanding = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
