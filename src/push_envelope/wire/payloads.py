"""
Platform payload builders — APNS, GCM and ADM payload shapes.

Every builder takes the body text separately from the message so the size
validator can rebuild a payload around a shortened copy of it.
"""

from typing import Any, Optional

from push_envelope.models.message import Message, Platform
from push_envelope.wire.codec import to_json
from push_envelope.wire.custom import JSON_KEY_SUFFIX, encode_passthrough, encode_string_only


class PayloadBuilder:
    # Dotted path of the body text inside the payload, for log messages
    body_path = ""

    def build(self, message: Message, text: str) -> dict[str, Any]:
        raise NotImplementedError

    def measured(self, payload: dict[str, Any]) -> dict[str, Any]:
        """The part of the payload the platform's size limit applies to."""
        return payload

    def carries_text(self, message: Message) -> bool:
        """Whether the body text appears in the payload and can be shortened."""
        return True


class ApnsPayloadBuilder(PayloadBuilder):
    body_path = "aps.alert.body"

    def build(self, message: Message, text: str) -> dict[str, Any]:
        alert: dict[str, Any] = {}
        if message.is_localized:
            alert["loc-key"] = message.localized_key
            if message.localized_arguments:
                alert["loc-args"] = list(message.localized_arguments)
        elif text:
            alert["body"] = text

        if message.is_title_localized:
            alert["title-loc-key"] = message.title_localized_key
            if message.title_localized_arguments:
                alert["title-loc-args"] = list(message.title_localized_arguments)
        elif message.title is not None:
            alert["title"] = message.title

        payload = encode_passthrough(message.custom)
        payload["aps"] = {"alert": alert}
        return payload

    def carries_text(self, message: Message) -> bool:
        return not message.is_localized


class GcmPayloadBuilder(PayloadBuilder):
    body_path = "data.message"

    def build(self, message: Message, text: str) -> dict[str, Any]:
        data = encode_passthrough(message.custom)
        if text:
            data["message"] = text
        if message.is_localized:
            data["message-loc-key"] = message.localized_key
            if message.localized_arguments:
                data["message-loc-args"] = list(message.localized_arguments)
        return {
            "data": data,
            "collapse_key": message.collapse_key,
            "time_to_live": message.ttl,
            "delay_while_idle": message.delay_while_idle,
            "priority": message.priority,
        }

    def measured(self, payload: dict[str, Any]) -> dict[str, Any]:
        return payload["data"]


class AdmPayloadBuilder(PayloadBuilder):
    body_path = "data.message"

    def build(self, message: Message, text: str) -> dict[str, Any]:
        data: dict[str, Any] = encode_string_only(message.custom)
        if text:
            data["message"] = text
        if message.is_localized:
            data["message-loc-key"] = message.localized_key
            if message.localized_arguments:
                data["message-loc-args" + JSON_KEY_SUFFIX] = to_json(list(message.localized_arguments))
        return {
            "data": data,
            "expiresAfter": message.ttl,
        }

    def measured(self, payload: dict[str, Any]) -> dict[str, Any]:
        return payload["data"]


_APNS = ApnsPayloadBuilder()

BUILDERS: dict[Platform, PayloadBuilder] = {
    Platform.APNS: _APNS,
    Platform.APNS_SANDBOX: _APNS,
    Platform.APNS_VOIP: _APNS,
    Platform.APNS_VOIP_SANDBOX: _APNS,
    Platform.GCM: GcmPayloadBuilder(),
    Platform.ADM: AdmPayloadBuilder(),
}


def build_payload(message: Message, platform: Platform, text: Optional[str] = None) -> dict[str, Any]:
    """Build the native payload for one platform from the message text (or a given copy)."""
    return BUILDERS[platform].build(message, message.text if text is None else text)
