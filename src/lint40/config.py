import os

from pydantic import BaseModel, Field, field_validator

from lint40.core.modes import Mode


class Lint40Settings(BaseModel):
    mode: Mode = Mode.DRAFT
    max_line_length: int = Field(default=80, gt=0)
    indent_width: int = Field(default=8, gt=0)
    max_nesting_depth: int = Field(default=3, ge=1)
    log_level: str = "WARNING"

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return Mode.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()


def get_settings() -> Lint40Settings:
    """Build settings from ``LINT40_*`` environment variables, falling back to the defaults."""
    env = {
        "mode": os.getenv("LINT40_MODE"),
        "max_line_length": os.getenv("LINT40_MAX_LINE_LENGTH"),
        "indent_width": os.getenv("LINT40_INDENT_WIDTH"),
        "max_nesting_depth": os.getenv("LINT40_MAX_NESTING"),
        "log_level": os.getenv("LINT40_LOG_LEVEL"),
    }
    return Lint40Settings.model_validate({k: v for k, v in env.items() if v is not None})
