"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from evaltrack import state


router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check():
    """Health check endpoint"""
    document = state.STORE.snapshot() if state.STORE else None
    return {
        "status": "ok",
        "message": "Evaluation tracker",
        "version": "1.0.0",
        "sessions": len(document.sessions) if document else 0,
        "submissions": len(document.submissions) if document else 0
    }
