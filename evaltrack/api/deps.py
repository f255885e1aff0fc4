"""
Request dependencies: services from shared state, caller identity
"""
from fastapi import HTTPException, Request

from evaltrack import state
from evaltrack.core.aggregator import SubmissionAggregator
from evaltrack.core.directory import IdentityVerifier
from evaltrack.core.gate import require_identity
from evaltrack.core.registry import SessionRegistry
from evaltrack.models import CampusIdentity


def _ready(service):
    if service is None:
        raise HTTPException(status_code=500, detail="Services are not initialized")
    return service


def get_directory() -> IdentityVerifier:
    return _ready(state.DIRECTORY)


def get_registry() -> SessionRegistry:
    return _ready(state.REGISTRY)


def get_aggregator() -> SubmissionAggregator:
    return _ready(state.AGGREGATOR)


def current_identity(request: Request) -> CampusIdentity:
    """Authenticated campus from the session cookie (401 otherwise)"""
    return require_identity(request.session)


async def request_body(request: Request) -> dict:
    """
    Request body as a dict, from JSON or a submitted form

    A missing or malformed body, or one that is not an object, reads as {}
    so that handlers report the missing field themselves.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return dict(form)

    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
