
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Literal, Optional
import os

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

class AppConfig(BaseModel):
    # env-derived defaults go through the same checks as explicit values
    log_level: LogLevel = Field(default_factory=lambda: os.getenv('LAPWATCH_LOG_LEVEL', 'INFO').upper(), validate_default=True)
    race_threads: int = Field(default_factory=lambda: os.getenv('LAPWATCH_RACE_THREADS', '8'), ge=2, validate_default=True)
    precision: int = Field(default_factory=lambda: os.getenv('LAPWATCH_PRECISION', '3'), ge=0, validate_default=True)

_config_singleton: Optional[AppConfig] = None

def get_config(force_refresh: bool = False) -> AppConfig:
    """Return a cached AppConfig built from the LAPWATCH_* environment.

    Raises pydantic.ValidationError when a LAPWATCH_* value is out of range.
    """
    global _config_singleton
    if force_refresh or _config_singleton is None:
        _config_singleton = AppConfig()
    return _config_singleton
