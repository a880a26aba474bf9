from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime

class StudyLogCreate(BaseModel):
    """Schema for recording a study event"""
    user_id: int
    date: datetime
    subject: str = Field(min_length=1)
    topics: List[str] = Field(min_length=1)
    study_time: int = Field(ge=0, description="Minutes studied")
    understanding: int = Field(ge=1, le=5)
    memo: Optional[str] = None

class StudyRecord(BaseModel):
    """Study event as supplied to the schedule generator"""
    subject: str
    topics: List[str]
    date: datetime
    understanding: int

    class Config:
        from_attributes = True

class ReviewCompletion(BaseModel):
    """Schema for completing a review"""
    item_id: int
    understanding: int = Field(ge=1, le=5)
    study_time: int = Field(default=0, ge=0, description="Minutes spent on the review")

class ReviewSessionCreate(BaseModel):
    """Schema for recording a batch of reviews done together"""
    user_id: int
    session_date: datetime
    total_items: int = Field(ge=0)
    completed_items: int = Field(default=0, ge=0)
    session_duration: int = Field(ge=0, description="Minutes")
    average_understanding: float = Field(default=0.0, ge=0, le=5)

    @model_validator(mode="after")
    def check_completed_within_total(self):
        if self.completed_items > self.total_items:
            raise ValueError("completed_items cannot exceed total_items")
        return self

class ReviewItemResponse(BaseModel):
    """Schema for review item output"""
    id: int
    user_id: int
    subject: str
    topic: str
    last_study_date: datetime
    next_review_date: datetime
    review_count: int
    difficulty: int
    understanding: int
    priority: int
    forgetting_curve_stage: int
    interval_days: int
    is_completed: bool

    class Config:
        from_attributes = True
