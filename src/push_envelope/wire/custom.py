"""
Custom data encoding — merges a message's custom mapping into a platform data section.

GCM and the APNS top level take any JSON value. ADM only takes strings, so
structured values move to a ``<key>_json`` entry holding their JSON text.
"""

from typing import Any, Optional

from push_envelope.wire.codec import to_json

JSON_KEY_SUFFIX = "_json"


def encode_passthrough(custom: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Copy custom data as-is; nested values stay nested."""
    return dict(custom or {})


def encode_string_only(custom: Optional[dict[str, Any]]) -> dict[str, str]:
    """Flatten custom data to string values for platforms that reject anything else."""
    encoded: dict[str, str] = {}
    for key, value in (custom or {}).items():
        if isinstance(value, str):
            encoded[key] = value
        elif isinstance(value, (bool, int, float)):
            encoded[key] = to_json(value)
        else:
            encoded[key + JSON_KEY_SUFFIX] = to_json(value)
    return encoded
