"""
Configuration settings loaded from environment variables.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Any
from dotenv import load_dotenv
from pathlib import Path

# Determine .env file path (backend/.env)
_env_path = Path(__file__).parent.parent / ".env"

# Load environment variables from .env file
load_dotenv(dotenv_path=_env_path, override=False)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application settings
    env: str = Field(
        default="local",
        alias="ENV",
        description="Environment (local, staging, production)"
    )
    log_level: str = Field(
        default="info",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    # Layout reconstruction
    row_tolerance_ratio: float = Field(
        default=0.5,
        alias="ROW_TOLERANCE_RATIO",
        description="Row tolerance as a multiple of the mean fragment height"
    )
    min_row_tolerance: float = Field(
        default=1e-6,
        alias="MIN_ROW_TOLERANCE",
        description="Lower bound for the row tolerance (all-zero-height fragments)"
    )

    # Verification
    price_tolerance_ratio: float = Field(
        default=0.01,
        alias="PRICE_TOLERANCE_RATIO",
        description="Relative tolerance between order price and paid amount (0.01 = 1%)"
    )
    verify_require_same_day: bool = Field(
        default=False,
        alias="VERIFY_REQUIRE_SAME_DAY",
        description=(
            "Also require the proof to be dated on the same calendar day as the order. "
            "Set to 'true', '1', 'yes', or 'on' to enable."
        )
    )

    # OCR
    ocr_min_confidence: float = Field(
        default=0.0,
        alias="OCR_MIN_CONFIDENCE",
        description="OCR records below this confidence are dropped before layout reconstruction"
    )
    gcp_credentials_path: str = Field(
        default="",
        alias="GOOGLE_APPLICATION_CREDENTIALS",
        description="Absolute path to Google Cloud service account JSON key file"
    )

    # Uploads
    max_upload_bytes: int = Field(
        default=5 * 1024 * 1024,
        alias="MAX_UPLOAD_BYTES",
        description="Maximum accepted image upload size in bytes"
    )

    @field_validator('verify_require_same_day', mode='before')
    @classmethod
    def parse_bool_from_string(cls, v: Any) -> bool:
        """Parse boolean from string environment variable."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on', 'y', 't')
        return bool(v)

    model_config = {
        "env_file": str(_env_path),
        "case_sensitive": False,
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }


# Create a singleton settings instance
settings = Settings()
