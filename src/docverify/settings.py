"""
Runtime configuration for the document verifier.

Values are read from the environment (and a ``.env`` file when present)
once, then kept immutable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import dotenv
from pydantic import BaseModel, Field, field_validator

from .extraction import DEFAULT_MODEL


class Settings(BaseModel):
    """Environment-driven settings shared by the API and the CLI."""

    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API key")

    MODEL: str = Field(DEFAULT_MODEL, description="Model used for extraction")

    TEMPERATURE: float = Field(0.1, description="Sampling temperature for extraction")

    REQUEST_TIMEOUT: Optional[float] = Field(
        None,
        description="OpenAI client timeout in seconds; unset keeps the client default",
    )

    PROMPTS_FILE: Optional[Path] = Field(
        None,
        description="Override for the packaged prompts YAML file",
    )

    PREVIEW_DPI: int = Field(100, description="Resolution of rendered page previews")

    LOG_LEVEL: str = Field("INFO", description="Logging level name")

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(5000)

    model_config = {
        "frozen": True,
    }

    @field_validator("TEMPERATURE")
    @classmethod
    def temperature_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"TEMPERATURE must be between 0 and 2, got {v}")
        return v

    @field_validator("PREVIEW_DPI")
    @classmethod
    def dpi_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"PREVIEW_DPI must be positive, got {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    def require_api_key(self) -> str:
        if not self.OPENAI_API_KEY:
            raise ValueError("OpenAI API key not set. Set OPENAI_API_KEY or pass api_key.")
        return self.OPENAI_API_KEY

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        dotenv.load_dotenv()

        timeout = os.getenv("DOCVERIFY_REQUEST_TIMEOUT")
        prompts_file = os.getenv("DOCVERIFY_PROMPTS_FILE")
        origins = os.getenv("DOCVERIFY_CORS_ORIGINS", "*")

        return cls(
            OPENAI_API_KEY=os.getenv("OPENAI_API_KEY"),
            MODEL=os.getenv("DOCVERIFY_MODEL", DEFAULT_MODEL),
            TEMPERATURE=float(os.getenv("DOCVERIFY_TEMPERATURE", "0.1")),
            REQUEST_TIMEOUT=float(timeout) if timeout else None,
            PROMPTS_FILE=Path(prompts_file) if prompts_file else None,
            PREVIEW_DPI=int(os.getenv("DOCVERIFY_PREVIEW_DPI", "100")),
            LOG_LEVEL=os.getenv("DOCVERIFY_LOG_LEVEL", "INFO"),
            CORS_ORIGINS=[o.strip() for o in origins.split(",") if o.strip()],
            API_HOST=os.getenv("DOCVERIFY_API_HOST", "0.0.0.0"),
            API_PORT=int(os.getenv("DOCVERIFY_API_PORT", "5000")),
        )
