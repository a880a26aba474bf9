from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime
from review_scheduler.database import Base

class StudyLog(Base):
    """A study event: one subject, the topics covered, and how well it went"""
    __tablename__ = "study_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    date = Column(DateTime, nullable=False, index=True)
    subject = Column(String, nullable=False)
    topics = Column(JSON, nullable=False)  # ["Algebra", "Fractions", ...]
    study_time = Column(Integer, nullable=False)  # minutes
    understanding = Column(Integer, nullable=False)  # 1-5
    memo = Column(String)

    created_at = Column(DateTime, default=datetime.now)
