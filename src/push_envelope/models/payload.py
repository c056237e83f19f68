"""
Per-platform payload results produced by the size validator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from push_envelope.errors import MessageTooLongError
from push_envelope.models.message import Platform


@dataclass(frozen=True)
class PayloadResult:
    """Outcome of building and size-checking one platform payload."""

    platform: Platform
    size: int
    limit: int
    payload: Optional[str] = None
    truncated: bool = False
    error: Optional[MessageTooLongError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the serialized payload or raise the overflow error."""
        if self.error is not None:
            raise self.error
        return self.payload

    @classmethod
    def fitted(cls, platform: Platform, payload: str, size: int, limit: int, truncated: bool = False) -> PayloadResult:
        return cls(platform=platform, size=size, limit=limit, payload=payload, truncated=truncated)

    @classmethod
    def too_long(cls, platform: Platform, size: int, limit: int) -> PayloadResult:
        return cls(
            platform=platform,
            size=size,
            limit=limit,
            error=MessageTooLongError(platform.value, size, limit),
        )
