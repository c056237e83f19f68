"""
Message model — the logical notification before it is turned into wire payloads.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

JSONValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]


class Platform(str, Enum):
    """Envelope keys understood by the dispatch service, in output order."""
    APNS = "APNS"
    APNS_SANDBOX = "APNS_SANDBOX"
    APNS_VOIP = "APNS_VOIP"
    APNS_VOIP_SANDBOX = "APNS_VOIP_SANDBOX"
    GCM = "GCM"
    ADM = "ADM"


ALL_PLATFORMS: tuple[Platform, ...] = tuple(Platform)

GCM_NO_COLLAPSE = "do_not_collapse"
PRIORITY_HIGH = "high"
PRIORITY_NORMAL = "normal"


class Message(BaseModel):
    """One notification, built once and then serialized.

    Instances are frozen; derive a variant with ``model_copy(update=...)``.
    ``platforms=None`` selects the configured default platforms.
    """
    text: str = ""
    title: Optional[str] = None
    localized_key: Optional[str] = None
    localized_arguments: Optional[list[str]] = None
    title_localized_key: Optional[str] = None
    title_localized_arguments: Optional[list[str]] = None
    custom: Optional[dict[str, JSONValue]] = None
    ttl: Optional[int] = Field(default=None, ge=0)
    platforms: Optional[frozenset[Platform]] = None

    allow_trimming: bool = True
    collapse_key: str = GCM_NO_COLLAPSE
    delay_while_idle: bool = False
    priority: Literal["high", "normal"] = PRIORITY_HIGH

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def is_localized(self) -> bool:
        return self.localized_key is not None

    @property
    def is_title_localized(self) -> bool:
        return self.title_localized_key is not None

    def selected_platforms(self, default: Optional[list[Platform]] = None) -> list[Platform]:
        """Selected platforms in canonical order."""
        chosen = self.platforms if self.platforms is not None else (default or ALL_PLATFORMS)
        return [p for p in ALL_PLATFORMS if p in chosen]
