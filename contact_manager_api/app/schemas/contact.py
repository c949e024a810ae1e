"""
Pydantic models for contact data.

``ContactInput`` is the request body for both create and update.
``name`` and ``phone`` are required and must not be blank; ``email`` and
``address`` are optional and normalised so that an empty string is
stored as NULL.  ``ContactRead`` is what the API returns.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ContactInput(BaseModel):
    """Schema for creating or replacing a contact."""

    name: str = Field(..., min_length=1, examples=["John Doe"])
    phone: str = Field(..., min_length=1, examples=["+1234567890"])
    email: Optional[str] = Field(None, examples=["john@example.com"])
    address: Optional[str] = Field(None, examples=["123 Main St, City, State 12345"])

    @field_validator("name", "phone")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        # Stored exactly as submitted; only whitespace-only values are refused.
        if not v.strip():
            raise ValueError("Value must not be blank")
        return v

    @field_validator("email", "address", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ContactRead(BaseModel):
    """Schema for reading a contact.

    ``created_at`` is ``None`` only in update responses, which echo the
    submitted fields instead of re-reading the row.
    """

    id: int
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
