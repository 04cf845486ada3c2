from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return str(v).strip().upper() or "INFO"

    @field_validator("log_json", mode="before")
    @classmethod
    def _parse_log_json(cls, v: bool | str) -> bool | str:
        if v == "":
            return False
        return v

    model_config = SettingsConfigDict(
        env_prefix="SERRORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
