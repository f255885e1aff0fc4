"""
Evaluation session endpoints: sessions, juries and students

Handlers are plain functions so FastAPI runs them in its threadpool; the
store lock serialises their writes.
"""
from fastapi import APIRouter, Depends

from evaltrack.api.deps import current_identity, get_registry, request_body
from evaltrack.core.registry import SessionRegistry
from evaltrack.models import CampusIdentity


router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("")
def list_sessions(
    identity: CampusIdentity = Depends(current_identity),
    registry: SessionRegistry = Depends(get_registry),
):
    """Sessions of the caller's campus"""
    return [s.to_wire() for s in registry.list(identity.campus)]


@router.post("")
def create_session(
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    registry: SessionRegistry = Depends(get_registry),
):
    """
    Create a session under the caller's campus

    Request:
        {"name": "C#22"}
    """
    session = registry.create(payload.get("name"), identity.campus)
    return {"message": "Session created successfully!", "session": session.to_wire()}


@router.delete("/{session_id}")
def delete_session(
    session_id: str,
    identity: CampusIdentity = Depends(current_identity),
    registry: SessionRegistry = Depends(get_registry),
):
    """Delete a session and all of its submissions"""
    registry.delete(session_id, identity.campus)
    return {"message": "Session deleted successfully."}


@router.post("/{session_id}/juries")
def add_jury(
    session_id: str,
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.add_jury(session_id, identity.campus, payload.get("juryName"))
    return {"message": "Jury added successfully.", "session": session.to_wire()}


@router.delete("/{session_id}/juries")
def remove_jury(
    session_id: str,
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.remove_jury(session_id, identity.campus, payload.get("juryName"))
    return {"message": "Jury deleted successfully.", "session": session.to_wire()}


@router.post("/{session_id}/students")
def add_student(
    session_id: str,
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.add_student(session_id, identity.campus, payload.get("studentName"))
    return {"message": "Student added successfully.", "session": session.to_wire()}


@router.delete("/{session_id}/students")
def remove_student(
    session_id: str,
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    registry: SessionRegistry = Depends(get_registry),
):
    session = registry.remove_student(session_id, identity.campus, payload.get("studentName"))
    return {"message": "Student deleted successfully.", "session": session.to_wire()}
