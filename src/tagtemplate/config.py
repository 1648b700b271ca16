"""Configuration for tagtemplate.

Read once from the environment:
- TAGTEMPLATE_STRATEGY: auto (default), generated or interpreted
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, field_validator

STRATEGY_ENV = "TAGTEMPLATE_STRATEGY"


class Settings(BaseModel):
    """Process-wide compiler settings."""

    model_config = {"frozen": True}

    strategy: Literal["auto", "generated", "interpreted"] = Field(
        default="auto",
        description="Compilation strategy; auto probes for code generation support",
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, value: object) -> object:
        """Accept surrounding whitespace and any letter case."""
        if isinstance(value, str):
            return value.strip().lower() or "auto"
        return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from environment variables."""
    env = os.environ if environ is None else environ
    data: dict[str, str] = {}
    if STRATEGY_ENV in env:
        data["strategy"] = env[STRATEGY_ENV]
    return Settings.model_validate(data)
