"""JSON text as it goes on the wire: compact, UTF-8, non-ASCII left unescaped."""

import json
from typing import Any


def to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))
