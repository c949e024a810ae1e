"""
Shared FastAPI dependencies for the API routes.
"""

from fastapi import Request

from contact_manager_api.app.services.contact_service import ContactStore


def get_store(request: Request) -> ContactStore:
    """Return the store the application factory attached at startup."""
    return request.app.state.store
