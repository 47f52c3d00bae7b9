from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from promptbot.domain import ConfirmStyle

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_words(value: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        parts = [str(p).strip() for p in value]
    else:
        parts = [p.strip() for p in str(value).split(",")]
    words = tuple(p.lower() for p in parts if p)
    if not words:
        raise ValueError("Expected a comma-separated word list, e.g., 'yes,yeah'")
    return words


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Dialog texts
    RESET_COMMAND: str = Field(default="reset")
    RESET_PROMPT_TEXT: str = Field(default="Are you sure you want to reset?")
    RESET_DONE_TEXT: str = Field(default="Reset count.")
    RESET_DECLINED_TEXT: str = Field(default="Did not reset count.")

    # Confirmation prompt
    CONFIRM_STYLE: ConfirmStyle = Field(default=ConfirmStyle.PATTERN)
    YES_SYNONYMS: Annotated[tuple[str, ...], NoDecode] = Field(default=("yes", "yeah", "yep", "yeppy"))
    NO_SYNONYMS: Annotated[tuple[str, ...], NoDecode] = Field(default=("no", "nope", "nono", "nop"))
    PROMPT_RETRY_TEXT: str = Field(default="Please try again.")
    PROMPT_ATTEMPTS: int = Field(default=3, ge=1)

    # Global behavior
    LOG_JSON: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Idle session sweeper
    SESSION_IDLE_TTL_S: int = Field(default=1800, ge=0)
    SWEEP_CRON: str = Field(default="*/5 * * * *")

    # Web host (3978 is the usual bot endpoint port)
    WEB_HOST: str = Field(default="127.0.0.1")
    WEB_PORT: int = Field(default=3978)

    @field_validator("YES_SYNONYMS", mode="before")
    @classmethod
    def _validate_yes(cls, v):  # type: ignore[override]
        return _parse_words(v)

    @field_validator("NO_SYNONYMS", mode="before")
    @classmethod
    def _validate_no(cls, v):  # type: ignore[override]
        return _parse_words(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _validate_level(cls, v):  # type: ignore[override]
        name = str(v).strip().upper()
        if name not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return name


def load_settings() -> Settings:
    return Settings()
