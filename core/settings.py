# core/settings.py

"""
Program-wide settings, read once from the environment (or a local .env file).

Every field can be overridden with a GRADEBOOK_-prefixed variable, e.g.:
    GRADEBOOK_LOG_LEVEL: Root log level (default "INFO").
    GRADEBOOK_RECORDS_DIR: Default parent directory for academic records.
    GRADEBOOK_EXPORT_DIR: Default directory for spreadsheet exports.
    GRADEBOOK_PASS_MARK: Percentage below which a score is flagged.
    GRADEBOOK_DISTINCTION_MARK: Percentage at or above which a score is highlighted.
"""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RECORDS_DIR = os.path.join("~", "Documents", "Gradebooks")


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Storage
    records_dir: str = DEFAULT_RECORDS_DIR
    export_dir: str = os.path.join(DEFAULT_RECORDS_DIR, "Exports")

    # Gradebook rendering
    missing_score_placeholder: str = "-"
    expected_total_weight: float = 100.0
    pass_mark: float = 50.0
    distinction_mark: float = 80.0

    model_config = SettingsConfigDict(
        env_prefix="GRADEBOOK_",
        env_file=".env",
        extra="ignore",
        validate_default=True,
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("records_dir", "export_dir")
    @classmethod
    def expand_user_dir(cls, value: str) -> str:
        return os.path.expanduser(value.strip())


settings = Settings()
