"""Configuration schema models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_USER_AGENT = "feedstore/0.1 (+https://pypi.org/project/feedstore/)"


class FetchConfig(BaseModel):
    """HTTP fetch settings for feed downloads."""

    timeout_seconds: float = Field(default=30.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    user_agent: str = DEFAULT_USER_AGENT


class GlobalConfig(BaseModel):
    """Global feedstore configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"
    fetch: FetchConfig = Field(default_factory=FetchConfig)
