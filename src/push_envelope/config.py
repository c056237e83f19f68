"""
Settings — size limits and platform defaults.
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from push_envelope.errors import ConfigError
from push_envelope.models.message import ALL_PLATFORMS, Platform

APNS_MAX_LENGTH = 2048
GCM_MAX_LENGTH = 4096
ADM_MAX_LENGTH = 6144

DEFAULT_LIMITS: dict[Platform, int] = {
    Platform.APNS: APNS_MAX_LENGTH,
    Platform.APNS_SANDBOX: APNS_MAX_LENGTH,
    Platform.APNS_VOIP: APNS_MAX_LENGTH,
    Platform.APNS_VOIP_SANDBOX: APNS_MAX_LENGTH,
    Platform.GCM: GCM_MAX_LENGTH,
    Platform.ADM: ADM_MAX_LENGTH,
}


class PushSettings(BaseModel):
    limits: dict[Platform, int] = Field(default_factory=lambda: dict(DEFAULT_LIMITS))
    default_platforms: list[Platform] = Field(default_factory=lambda: list(ALL_PLATFORMS))
    truncation_marker: str = "..."

    model_config = {"frozen": True}

    @field_validator("limits")
    @classmethod
    def _fill_limits(cls, value: dict[Platform, int]) -> dict[Platform, int]:
        # A partial override keeps the defaults for the platforms it leaves out
        for platform, limit in value.items():
            if limit <= 0:
                raise ValueError(f"limit for {platform.value} must be positive")
        return {**DEFAULT_LIMITS, **value}

    @field_validator("default_platforms")
    @classmethod
    def _non_empty(cls, value: list[Platform]) -> list[Platform]:
        if not value:
            raise ValueError("default_platforms must not be empty")
        return value

    def limit_for(self, platform: Platform) -> int:
        return self.limits[platform]

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PushSettings":
        """Load settings from a JSON file. Keys left out keep their defaults."""
        try:
            raw = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to read settings from {path}: {e}")
        if not isinstance(raw, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {path}: {e}")
