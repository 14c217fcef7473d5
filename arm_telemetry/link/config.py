"""Configuration loading via environment variables."""
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arm_telemetry.link.models import DEFAULT_AXIS_LIMITS, AxisLimits

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ARM_TELEMETRY_", case_sensitive=False)

    threshold_a: float = Field(5.0, gt=0.0)
    frequency_hz: float = Field(100.0, gt=0.0)
    noise_probability: float = Field(0.05, ge=0.0, le=1.0)
    alert_probability: float = Field(0.02, ge=0.0, le=1.0)
    frame_count: int = Field(0, ge=0)
    realtime: bool = False
    seed: Optional[int] = None
    serial_port: str = ""
    baudrate: int = Field(115200, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def tick_s(self) -> float:
        return 1.0 / self.frequency_hz

    def axis_limits(self) -> Tuple[AxisLimits, ...]:
        return DEFAULT_AXIS_LIMITS
