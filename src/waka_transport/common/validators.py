from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


def require_fields(data: Mapping[str, Any], fields: tuple[str, ...], message: str) -> None:
    """Raise one ValidationError if any of ``fields`` is missing or blank."""
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)
        if isinstance(value, (list, tuple)) and not value:
            raise ValidationError(message)


def parse_id(value: Any, label: str) -> int:
    """Validate a record id before it reaches the store.

    Malformed ids are a 400 so callers can tell them apart from a 404.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label} id")
    if isinstance(value, int):
        ident = value
    else:
        text = str(value or "").strip()
        if not text.isdigit():
            raise ValidationError(f"Invalid {label} id")
        ident = int(text)
    if ident <= 0:
        raise ValidationError(f"Invalid {label} id")
    return ident


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
