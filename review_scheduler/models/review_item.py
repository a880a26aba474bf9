from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from datetime import datetime
from review_scheduler.database import Base

class ReviewItem(Base):
    """Forgetting-curve review state per (user, subject, topic)"""
    __tablename__ = "review_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    subject = Column(String, nullable=False)
    topic = Column(String, nullable=False)

    last_study_date = Column(DateTime, nullable=False)
    next_review_date = Column(DateTime, nullable=False)

    review_count = Column(Integer, nullable=False, default=0)  # completed reviews
    difficulty = Column(Integer, nullable=False)  # 1-5, set once at creation
    understanding = Column(Integer, nullable=False)  # 1-5, latest self-report
    priority = Column(Integer, nullable=False)  # 0-100 urgency

    # Forgetting curve fields
    forgetting_curve_stage = Column(Integer, nullable=False, default=1)  # 1-7
    interval_days = Column(Integer, nullable=False, default=1)  # always the stage's interval

    is_completed = Column(Boolean, nullable=False, default=False)  # retired from scheduling
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (
        Index("ix_review_items_user_subject_topic", "user_id", "subject", "topic"),
    )
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return (
            f"<ReviewItem id={self.id} user={self.user_id} "
            f"[{self.subject}] {self.topic} stage={self.forgetting_curve_stage} "
            f"priority={self.priority}>"
        )
