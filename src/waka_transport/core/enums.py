from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role tag deciding which guard accepts an identity."""

    USER = "user"
    STAFF = "staff"
