from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.validators import optional_str
from ..core.enums import Role

# API key -> column/attribute name
PROFILE_FIELDS: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "dob": "dob",
    "email": "email",
    "address": "address",
    "town": "town",
    "postcode": "postcode",
    "phoneNumber": "phone_number",
    "altPhoneNumber": "alt_phone_number",
    "gender": "gender",
    "ethnicity": "ethnicity",
    "disability": "disability",
    "disabilityDetails": "disability_details",
    "assistance": "assistance",
    "emergencyName": "emergency_name",
    "emergencyPhone": "emergency_phone",
    "emergencyRelationship": "emergency_relationship",
}


@dataclass(frozen=True)
class UserProfile:
    """Personal details shared by passengers and registration applications."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    town: Optional[str] = None
    postcode: Optional[str] = None
    phone_number: Optional[str] = None
    alt_phone_number: Optional[str] = None
    gender: Optional[str] = None
    ethnicity: Optional[str] = None
    disability: Optional[str] = None
    disability_details: Optional[str] = None
    assistance: Optional[str] = None
    emergency_name: Optional[str] = None
    emergency_phone: Optional[str] = None
    emergency_relationship: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "UserProfile":
        return cls(**{attr: optional_str(data.get(key)) for key, attr in PROFILE_FIELDS.items()})

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserProfile":
        return cls(**{f.name: row.get(f.name) for f in fields(cls)})

    def as_row(self) -> dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self) -> dict[str, Optional[str]]:
        return {key: getattr(self, attr) for key, attr in PROFILE_FIELDS.items()}


@dataclass(frozen=True)
class User:
    user_id: int
    username: str
    password_hash: str
    role: Role = Role.USER
    profile: UserProfile = field(default_factory=UserProfile)
    created_at: Optional[datetime] = None

    @property
    def email(self) -> Optional[str]:
        return self.profile.email

    def to_json(self) -> dict:
        # password_hash never leaves the service layer
        return {"id": self.user_id, "username": self.username, "role": self.role.value, **self.profile.to_json()}
