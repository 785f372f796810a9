"""
Text (JSON) helpers for records and plain values.

Used for diagnostics and human-readable dumps, never for the persisted
binary format.
"""

import json
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

class RecordJSONEncoder(json.JSONEncoder):
    """
    JSON Encoder for record documents and parsed type names.

    RULES:
    1. Dates are ISO 8601 strings.
    2. Enums use their .value.
    3. Decimals are preserved as strings (no float precision loss).
    4. Sets -> Lists (sorted for determinism).
    5. Bytes -> lowercase hex (payload documents may carry binary fields).
    6. Versioned records are dumped through their to_document().
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return sorted(list(obj))
        if isinstance(obj, (bytes, bytearray)):
            return bytes(obj).hex()
        if hasattr(obj, "to_document"):
            return obj.to_document()
        if hasattr(obj, "__dataclass_fields__"):
            from dataclasses import asdict
            return asdict(obj)

        return super().default(obj)


def to_json(value: Any, indent: Optional[int] = None) -> str:
    """Serialize a value (or record) to JSON text."""
    return json.dumps(value, cls=RecordJSONEncoder, indent=indent, sort_keys=True)


def to_json_bytes(value: Any) -> bytes:
    return to_json(value).encode("utf-8")


def from_json(text: Any) -> Any:
    """Parse JSON text or UTF-8 bytes."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    return json.loads(text)
