"""Pydantic schemas for payloads returned by the Users API.

These schemas act as contracts at the ingress point so a malformed server
response is detected at the client boundary instead of deep in the UI.
"""
from pydantic import BaseModel, ConfigDict, Field


class UserSchema(BaseModel):
    """A persisted user as reported by the server."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    age: int = Field(ge=0)
    salary: float = Field(ge=0)
    mobile_number: str = Field(alias="mobileNumber")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
