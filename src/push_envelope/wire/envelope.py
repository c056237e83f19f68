"""
Envelope assembly — the multi-protocol JSON document handed to the dispatch transport.

The envelope has a ``default`` entry holding the message text and one entry
per selected platform whose value is that platform's payload as a JSON
string, not a nested object.
"""

import logging
from typing import Literal, Optional

from push_envelope.config import PushSettings
from push_envelope.errors import InvalidMessageError
from push_envelope.models.message import Message, Platform
from push_envelope.models.payload import PayloadResult
from push_envelope.wire.codec import byte_length, to_json
from push_envelope.wire.size import SizeValidator

logger = logging.getLogger(__name__)

OverflowPolicy = Literal["raise", "drop"]

_CONTENT_FIELDS = {
    "text",
    "title",
    "localized_key",
    "localized_arguments",
    "title_localized_key",
    "title_localized_arguments",
    "custom",
    "collapse_key",
}


class EnvelopeAssembler:
    def __init__(self, settings: Optional[PushSettings] = None):
        self._settings = settings or PushSettings()
        self._validator = SizeValidator(self._settings)

    @property
    def settings(self) -> PushSettings:
        return self._settings

    def check(self, message: Message) -> list[Platform]:
        """Reject messages that cannot produce an envelope. Returns the platforms to build."""
        if not message.text and not message.custom:
            raise InvalidMessageError("Message needs text or custom data")
        try:
            byte_length(to_json(message.model_dump(include=_CONTENT_FIELDS)))
        except ValueError as e:
            # Non-finite floats and lone surrogates have no UTF-8 JSON form
            raise InvalidMessageError(f"Message content cannot be sent as JSON: {e}")
        platforms = message.selected_platforms(self._settings.default_platforms)
        if not platforms:
            raise InvalidMessageError("Message has no platforms selected")
        return platforms

    def build_payloads(self, message: Message) -> dict[Platform, PayloadResult]:
        """Size-checked payload for every selected platform, failures included."""
        return {platform: self._validator.validate(message, platform) for platform in self.check(message)}

    def assemble(self, message: Message, on_overflow: OverflowPolicy = "raise") -> str:
        """Serialize the message into the envelope string.

        With ``on_overflow="raise"`` the first oversized platform aborts the
        whole envelope with MessageTooLongError. ``"drop"`` leaves oversized
        platforms out instead.
        """
        envelope: dict[str, str] = {"default": message.text}
        for platform, result in self.build_payloads(message).items():
            if not result.ok and on_overflow == "drop":
                logger.warning("Dropping %s from envelope: %s", platform.value, result.error)
                continue
            envelope[platform.value] = result.unwrap()
        return to_json(envelope)


def assemble(message: Message, settings: Optional[PushSettings] = None, on_overflow: OverflowPolicy = "raise") -> str:
    """Build the envelope string for a message with the given (or default) settings."""
    return EnvelopeAssembler(settings).assemble(message, on_overflow=on_overflow)
