"""
Size validation — keeps each platform payload under its byte limit.

A payload that is too long only because of its body text gets a shortened
copy of the text, cut on a character boundary and ended with a marker. Each
candidate cut is rebuilt and measured, since JSON escaping means character
counts say little about the serialized size. Anything else that is too long
comes back as a failed result.
"""

import logging
from typing import Any, Optional

from push_envelope.config import PushSettings
from push_envelope.models.message import Message, Platform
from push_envelope.models.payload import PayloadResult
from push_envelope.wire.codec import byte_length, to_json
from push_envelope.wire.payloads import BUILDERS, PayloadBuilder

logger = logging.getLogger(__name__)


class SizeValidator:
    def __init__(self, settings: Optional[PushSettings] = None):
        self._settings = settings or PushSettings()

    def measure(self, payload: dict[str, Any], platform: Platform) -> int:
        """Byte size of the limited part of a payload, serialized."""
        return byte_length(to_json(BUILDERS[platform].measured(payload)))

    def validate(self, message: Message, platform: Platform) -> PayloadResult:
        builder = BUILDERS[platform]
        limit = self._settings.limit_for(platform)
        payload = builder.build(message, message.text)
        size = self.measure(payload, platform)
        if size <= limit:
            return PayloadResult.fitted(platform, to_json(payload), size, limit)

        if not (message.allow_trimming and message.text and builder.carries_text(message)):
            logger.debug("%s payload is %d bytes, over the %d byte limit, and has no text to cut",
                         platform.value, size, limit)
            return PayloadResult.too_long(platform, size, limit)
        return self._truncate(message, platform, builder, size, limit)

    def _truncate(
        self, message: Message, platform: Platform, builder: PayloadBuilder, size: int, limit: int,
    ) -> PayloadResult:
        marker = self._settings.truncation_marker
        raw = message.text.encode("utf-8")

        def shortened(keep: int) -> tuple[dict[str, Any], int]:
            payload = builder.build(message, raw[:keep].decode("utf-8", errors="ignore") + marker)
            return payload, self.measure(payload, platform)

        # Longest prefix of the text that fits; size only grows with the prefix
        low, high = 0, len(raw) - 1
        best = None
        while low <= high:
            keep = (low + high) // 2
            payload, fitted_size = shortened(keep)
            if fitted_size <= limit:
                best = (keep, payload, fitted_size)
                low = keep + 1
            else:
                high = keep - 1

        if best is None or best[0] == 0:
            logger.debug("%s payload is %d bytes, over the %d byte limit, even with an empty %s",
                         platform.value, size, limit, builder.body_path)
            return PayloadResult.too_long(platform, size, limit)

        keep, payload, fitted_size = best
        logger.debug("Truncated %s %s to %d of %d bytes, payload %d -> %d bytes (limit %d)",
                     platform.value, builder.body_path, keep, len(raw), size, fitted_size, limit)
        return PayloadResult.fitted(platform, to_json(payload), fitted_size, limit, truncated=True)
