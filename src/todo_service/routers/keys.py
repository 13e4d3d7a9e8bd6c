"""API key issuance endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, RedirectResponse

from todo_service.core.state import get_app_state

router = APIRouter()


@router.get("/API_KEY", response_class=PlainTextResponse)
async def issue_api_key() -> PlainTextResponse:
    """Issue a new API key seeded with the default tasks."""
    state = get_app_state()
    if state.key_issuer is None:
        msg = "KeyIssuer not initialized"
        raise RuntimeError(msg)

    return PlainTextResponse(state.key_issuer.issue())


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Send browsers to the key issuance endpoint."""
    return RedirectResponse(url="/API_KEY", status_code=302)
