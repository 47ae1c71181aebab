"""Configuration models for the application."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CampusEventsConfig(BaseSettings):
    """Main configuration for the campus events application."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUS_EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    # Reporting
    top_students_limit: int = Field(default=3, ge=1, description="Students shown in the most active ranking")
    popular_events_limit: int = Field(default=3, ge=1, description="Events shown in the most popular ranking")
    report_output_dir: str = Field(default=".", description="Directory where event reports are written")

    # Feedback rules
    feedback_comment_max_length: int = Field(default=500, ge=1)
    feedback_requires_attendance: bool = Field(default=False)

    # Session
    seed_demo_data: bool = Field(default=True, description="Load the demo fixture into a new session")
