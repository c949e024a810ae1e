"""
Health check endpoint.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from contact_manager_api.app.schemas.response import Envelope, ResponseCode, send_response

router = APIRouter()


@router.get("/health", response_model=Envelope)
async def health() -> JSONResponse:
    return send_response(ResponseCode.SUCCESS, None)
