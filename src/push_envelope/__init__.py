"""
push-envelope — multi-platform push notification envelopes.

Turns one notification into APNS, GCM and ADM payloads, keeps each under its
platform's size limit, and wraps them in a single JSON envelope for the
dispatch service.
"""

from push_envelope.config import PushSettings
from push_envelope.errors import PushEnvelopeError, InvalidMessageError, MessageTooLongError, ConfigError
from push_envelope.models.message import Message, Platform
from push_envelope.models.payload import PayloadResult
from push_envelope.wire.envelope import EnvelopeAssembler, assemble
from push_envelope.wire.size import SizeValidator

__version__ = "0.1.0"
__all__ = [
    "Message",
    "Platform",
    "PayloadResult",
    "PushSettings",
    "EnvelopeAssembler",
    "SizeValidator",
    "assemble",
    "PushEnvelopeError",
    "InvalidMessageError",
    "MessageTooLongError",
    "ConfigError",
]
