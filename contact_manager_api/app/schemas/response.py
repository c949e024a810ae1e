"""
Uniform response envelope.

Every endpoint answers with ``{"code": int, "msg": str | null,
"data": ...}``.  ``code`` is zero on success and one of the
``ResponseCode`` values otherwise.  ``data`` is left out entirely when
the operation has no payload (health, delete, failures) so clients can
distinguish "no payload" from an empty list.
"""

from enum import IntEnum
from typing import Any, Generic, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class ResponseCode(IntEnum):
    SUCCESS = 0
    VALIDATION_ERROR = 1
    NOT_FOUND = 2
    DATABASE_ERROR = 3
    # Reserved for clients; the service never produces it.
    NETWORK_ERROR = -1


class ErrorMessage:
    """Human readable messages used in envelopes."""

    REQUIRED_FIELD_MISSING = "Required field is missing"
    EMAIL_ALREADY_EXISTS = "Email already exists in the system"
    INVALID_INPUT = "Invalid input data provided"
    INVALID_CONTACT_ID = "Invalid contact ID provided"

    CONTACT_NOT_FOUND = "Contact not found"

    CONTACT_CREATED = "Contact created successfully"
    CONTACT_UPDATED = "Contact updated successfully"
    CONTACT_DELETED = "Contact deleted successfully"

    DATA_RETRIEVAL_FAILED = "Failed to retrieve data"
    DATA_SAVE_FAILED = "Failed to save data"
    DATA_UPDATE_FAILED = "Failed to update data"
    DATA_DELETE_FAILED = "Failed to delete data"

    INTERNAL_SERVER_ERROR = "Internal server error occurred"

    @classmethod
    def not_found(cls, contact_id: Any) -> str:
        return f"{cls.CONTACT_NOT_FOUND} (ID: {contact_id})"


# HTTP status sent alongside each code the service produces.  NETWORK_ERROR
# is reserved for clients and has no entry.
HTTP_STATUS_FOR_CODE = {
    ResponseCode.SUCCESS: status.HTTP_200_OK,
    ResponseCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ResponseCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResponseCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class Envelope(BaseModel, Generic[T]):
    """Schema of the response envelope, used for the OpenAPI docs."""

    code: int
    msg: Optional[str] = None
    data: Optional[T] = None


def send_response(
    code: ResponseCode,
    msg: Optional[str] = None,
    data: Any = None,
    status_code: Optional[int] = None,
) -> JSONResponse:
    """Build the JSON envelope response.

    ``data`` is only included when it is not ``None``.  The HTTP status
    defaults to the one mapped to ``code``.
    """
    content: dict = {"code": int(code), "msg": msg}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    if status_code is None:
        status_code = HTTP_STATUS_FOR_CODE[code]
    return JSONResponse(status_code=status_code, content=content)
