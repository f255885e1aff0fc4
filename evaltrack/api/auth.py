"""
Login, logout and session-check endpoints
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from evaltrack.api.deps import get_directory, request_body
from evaltrack.core.directory import IdentityVerifier
from evaltrack.core.gate import SESSION_USER_KEY, identity_from_session


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
def login(
    request: Request,
    payload: dict = Depends(request_body),
    directory: IdentityVerifier = Depends(get_directory),
):
    """
    Log a campus in

    Request (JSON or form-encoded):
        {"username": "Toulouse", "password": "demo"}

    Bad credentials are not an HTTP error: the response is 200 with
    success=false.
    """
    identity = directory.authenticate(payload.get("username"), payload.get("password"))

    if identity is None:
        return {"success": False, "message": "Invalid credentials."}

    request.session[SESSION_USER_KEY] = identity.model_dump()
    logger.info(f"🔑 {identity.campus} logged in")

    return {
        "success": True,
        "message": "Logged in successfully!",
        "campus": identity.campus
    }


@router.get("/logout")
async def logout(request: Request):
    """Drop the session and go back to the home page"""
    identity = identity_from_session(request.session)
    request.session.clear()
    if identity:
        logger.info(f"👋 {identity.campus} logged out")
    return RedirectResponse(url="/", status_code=302)


@router.get("/checkSession")
async def check_session(request: Request):
    identity = identity_from_session(request.session)
    if identity is None:
        return {"loggedIn": False, "campus": None}
    return {"loggedIn": True, "campus": identity.campus}
