"""
Access gate - identity and ownership checks
"""
import logging
from typing import Mapping, Optional

from evaltrack.errors import Forbidden, Unauthorized
from evaltrack.models import CampusIdentity, EvaluationSession


logger = logging.getLogger(__name__)

# Key of the identity inside the HTTP session cookie
SESSION_USER_KEY = "user"


def identity_from_session(http_session: Mapping) -> Optional[CampusIdentity]:
    """Identity stored by login, or None"""
    user = http_session.get(SESSION_USER_KEY)
    if not user:
        return None
    return CampusIdentity(**user)


def require_identity(http_session: Mapping) -> CampusIdentity:
    identity = identity_from_session(http_session)
    if identity is None:
        raise Unauthorized()
    return identity


def ensure_owner(session: EvaluationSession, campus: str) -> EvaluationSession:
    """Raise Forbidden unless the session belongs to the campus"""
    if session.campus != campus:
        logger.warning(f"🚫 Campus {campus} denied access to session {session.id} ({session.campus})")
        raise Forbidden()
    return session
