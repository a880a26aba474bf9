from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of review_scheduler folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'review_scheduler.db'}"

    # Scheduling
    study_window_days: int = 90  # trailing window scanned for new topics

    # Logging
    log_level: str = "INFO"
    log_json: bool = True  # False renders human-readable console lines

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_prefix = "REVIEW_"

settings = Settings()
