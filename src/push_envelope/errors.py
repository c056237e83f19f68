"""
push-envelope error types.
"""

from typing import Any, Optional


class PushEnvelopeError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidMessageError(PushEnvelopeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_message", message, details)


class MessageTooLongError(PushEnvelopeError):
    """A platform payload is over its size limit and text truncation cannot fix it."""

    def __init__(self, platform: str, measured_size: int, limit: int):
        super().__init__(
            "message_too_long",
            f"Your message for {platform} is too long: {measured_size} bytes (limit {limit})",
            {"platform": platform, "measured_size": measured_size, "limit": limit},
        )
        self.platform = platform
        self.measured_size = measured_size
        self.limit = limit


class ConfigError(PushEnvelopeError):
    def __init__(self, message: str):
        super().__init__("config_error", message)
