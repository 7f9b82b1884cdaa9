"""Editable form value for a user that may not exist on the server yet."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from usermgmt.models.schemas import UserSchema

# Wire field name -> dataclass attribute
FIELDS: Dict[str, str] = {
    "name": "name",
    "age": "age",
    "salary": "salary",
    "mobileNumber": "mobile_number",
}


@dataclass(frozen=True)
class UserDraft:
    """User-shaped value under edit.

    Values are kept exactly as entered; the server owns validation. ``id`` is
    ``None`` while creating and set while editing an existing record.
    """

    id: Optional[int] = None
    name: Any = ""
    age: Any = 0
    salary: Any = 0
    mobile_number: Any = ""

    @classmethod
    def from_user(cls, user: UserSchema) -> "UserDraft":
        return cls(
            id=user.id,
            name=user.name,
            age=user.age,
            salary=user.salary,
            mobile_number=user.mobile_number,
        )

    def get(self, field: str) -> Any:
        return getattr(self, FIELDS[field])

    def with_field(self, field: str, value: Any) -> "UserDraft":
        """Return a copy with ``field`` (wire name) set to ``value``."""
        return replace(self, **{FIELDS[field]: value})

    def to_payload(self) -> Dict[str, Any]:
        payload = {field: self.get(field) for field in FIELDS}
        if self.id is not None:
            payload = {"id": self.id, **payload}
        return payload
