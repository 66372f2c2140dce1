"""
Pydantic models for club member data.

``MemberCreate`` and ``MemberUpdate`` describe request bodies,
``MemberRead`` describes a stored member as returned by the API and
``MemberSeed`` validates records from the seed dataset.  The
``name`` field is deliberately optional on ``MemberCreate``: a missing
name is reported by the store as ``Name is required`` rather than by
the schema layer, so clients see the same message for a missing and
an empty name.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _stringify_id(value):
    # Seed files and older clients may send numeric ids.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class MemberCreate(BaseModel):
    """Schema for creating a member."""

    name: Optional[str] = Field(None, examples=["Ana"])
    age: Optional[int] = Field(None, examples=[31])
    rating: Optional[int] = Field(None, ge=1, le=5, examples=[4])
    activities: Optional[List[str]] = Field(None, examples=[["Chess", "Hiking"]])


class MemberUpdate(BaseModel):
    """Schema for a partial member update.

    All fields are optional; only fields present in the request body
    are applied.  ``rating`` may be sent as ``null`` to mark a member
    unrated, but ``name`` and ``activities`` may not be cleared.
    """

    name: Optional[str] = None
    age: Optional[int] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    activities: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError("Name must not be empty")
        return v

    @field_validator("activities")
    @classmethod
    def validate_activities(cls, v):
        if v is None:
            raise ValueError("Activities must be a list of strings")
        return v


class MemberRead(BaseModel):
    """Schema for reading a member from the API."""

    id: str
    name: str
    age: Optional[int] = None
    rating: Optional[int] = None
    activities: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _stringify_id(v)


class MemberSeed(MemberCreate):
    """Schema for a record of the seed dataset; ``id`` may be omitted."""

    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _stringify_id(v)
