"""
Contact endpoints.

These routes expose the CRUD API for contacts.  Request bodies and
path parameters are validated by FastAPI against ``ContactInput`` and
``int`` before a handler runs; malformed requests are turned into
validation envelopes by the exception handlers registered in
``main.py`` and never reach the store.

Store failures are translated by ``failure_response``: a uniqueness
conflict is a validation error, anything else a database error.  The
full error and the offending input are logged; the client only sees
the fixed message.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from contact_manager_api.app.api.deps import get_store
from contact_manager_api.app.schemas.contact import ContactInput, ContactRead
from contact_manager_api.app.schemas.response import (
    Envelope,
    ErrorMessage,
    ResponseCode,
    send_response,
)
from contact_manager_api.app.services.contact_service import (
    ContactStore,
    FailureKind,
    StoreFailure,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def failure_response(
    failure: StoreFailure,
    database_message: str,
    log_message: str,
    **context: Any,
) -> JSONResponse:
    """Log a store failure and map it onto an envelope."""
    logger.error(
        log_message,
        exc_info=(type(failure.error), failure.error, failure.error.__traceback__),
        extra={"error": failure.message, "failure_kind": failure.kind.value, **context},
    )
    if failure.kind is FailureKind.CONFLICT:
        return send_response(ResponseCode.VALIDATION_ERROR, ErrorMessage.EMAIL_ALREADY_EXISTS)
    return send_response(ResponseCode.DATABASE_ERROR, database_message)


def not_found_response(contact_id: int, log_message: str) -> JSONResponse:
    logger.warning(log_message, extra={"id": contact_id})
    return send_response(ResponseCode.NOT_FOUND, ErrorMessage.not_found(contact_id))


@router.get("", response_model=Envelope[List[ContactRead]])
async def list_contacts(store: ContactStore = Depends(get_store)) -> JSONResponse:
    """Return all contacts, most recent first.

    An empty table is a success with an empty list.
    """
    result = store.list_contacts()
    if not result.ok:
        return failure_response(
            result.failure, ErrorMessage.DATA_RETRIEVAL_FAILED, "Error fetching contacts"
        )
    logger.info("Contacts retrieved successfully", extra={"count": len(result.value)})
    return send_response(ResponseCode.SUCCESS, None, result.value)


@router.post(
    "",
    response_model=Envelope[ContactRead],
    status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    contact_in: ContactInput,
    store: ContactStore = Depends(get_store),
) -> JSONResponse:
    """Create a contact and return it with its assigned id and timestamp."""
    result = store.create_contact(contact_in)
    if not result.ok:
        return failure_response(
            result.failure,
            ErrorMessage.DATA_SAVE_FAILED,
            "Error creating contact",
            contact_data=contact_in.model_dump(),
        )
    contact = result.value
    logger.info(
        "Contact created successfully",
        extra={"id": contact.id, "contact_name": contact.name, "contact_phone": contact.phone},
    )
    return send_response(
        ResponseCode.SUCCESS,
        ErrorMessage.CONTACT_CREATED,
        contact,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{contact_id}", response_model=Envelope[ContactRead])
async def get_contact(contact_id: int, store: ContactStore = Depends(get_store)) -> JSONResponse:
    """Retrieve a single contact by ID."""
    result = store.get_contact(contact_id)
    if not result.ok:
        return failure_response(
            result.failure,
            ErrorMessage.DATA_RETRIEVAL_FAILED,
            "Error fetching contact",
            id=contact_id,
        )
    contact: Optional[ContactRead] = result.value
    if contact is None:
        return not_found_response(contact_id, "Contact not found")
    logger.info("Contact retrieved successfully", extra={"id": contact_id})
    return send_response(ResponseCode.SUCCESS, None, contact)


@router.put("/{contact_id}", response_model=Envelope[ContactRead])
async def update_contact(
    contact_id: int,
    contact_in: ContactInput,
    store: ContactStore = Depends(get_store),
) -> JSONResponse:
    """Replace a contact's fields.

    The response echoes the submitted fields with the ID; the row is
    not read back.
    """
    result = store.update_contact(contact_id, contact_in)
    if not result.ok:
        return failure_response(
            result.failure,
            ErrorMessage.DATA_UPDATE_FAILED,
            "Error updating contact",
            id=contact_id,
            contact_data=contact_in.model_dump(),
        )
    if result.value == 0:
        return not_found_response(contact_id, "Contact not found for update")
    logger.info(
        "Contact updated successfully",
        extra={"id": contact_id, "contact_name": contact_in.name, "contact_phone": contact_in.phone},
    )
    updated = ContactRead(id=contact_id, **contact_in.model_dump())
    return send_response(
        ResponseCode.SUCCESS,
        ErrorMessage.CONTACT_UPDATED,
        updated.model_dump(exclude={"created_at"}),
    )


@router.delete("/{contact_id}", response_model=Envelope)
async def delete_contact(contact_id: int, store: ContactStore = Depends(get_store)) -> JSONResponse:
    """Delete a contact.  No payload is returned."""
    result = store.delete_contact(contact_id)
    if not result.ok:
        return failure_response(
            result.failure,
            ErrorMessage.DATA_DELETE_FAILED,
            "Error deleting contact",
            id=contact_id,
        )
    if result.value == 0:
        return not_found_response(contact_id, "Contact not found for deletion")
    logger.info("Contact deleted successfully", extra={"id": contact_id})
    return send_response(ResponseCode.SUCCESS, ErrorMessage.CONTACT_DELETED)
