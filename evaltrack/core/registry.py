"""
Session registry - evaluation sessions scoped by owning campus

All lookups are linear scans over the store's document. Every mutating
operation runs inside store.mutate(), so it is persisted before the
method returns.
"""
import logging
from typing import List

from evaltrack.core.gate import ensure_owner
from evaltrack.core.store import MemoryDocumentStore
from evaltrack.errors import NotFound, ValidationError
from evaltrack.models import Document, EvaluationSession


logger = logging.getLogger(__name__)

# Session attribute holding each kind of member name
JURIES = "juries"
STUDENTS = "students"

_MEMBER_LABELS = {JURIES: "Jury", STUDENTS: "Student"}


def member_name(value):
    """Jury or student name as stored: numbers from JSON bodies become strings"""
    return None if value is None else str(value)


def _find(document: Document, session_id: str) -> EvaluationSession:
    for session in document.sessions:
        if session.id == session_id:
            return session
    raise NotFound("Session not found.")


class SessionRegistry:

    def __init__(self, store: MemoryDocumentStore):
        self.store = store

    def create(self, name, campus: str) -> EvaluationSession:
        """
        Create an empty session owned by campus

        Raises:
            ValidationError: if name is empty or missing
        """
        if not name:
            raise ValidationError("Session name is required.")

        session = EvaluationSession(name=str(name), campus=campus)
        with self.store.mutate() as document:
            document.sessions.append(session)

        logger.info(f"➕ {campus} created session {session.id} ({name!r})")
        return session.model_copy(deep=True)

    def list(self, campus: str) -> List[EvaluationSession]:
        """Sessions owned by campus, in insertion order"""
        document = self.store.snapshot()
        return [s for s in document.sessions if s.campus == campus]

    def get(self, session_id: str, campus: str) -> EvaluationSession:
        document = self.store.snapshot()
        return ensure_owner(_find(document, session_id), campus)

    def delete(self, session_id: str, campus: str) -> None:
        """Remove a session and every submission that references it"""
        with self.store.mutate() as document:
            session = ensure_owner(_find(document, session_id), campus)
            document.sessions.remove(session)
            before = len(document.submissions)
            document.submissions = [
                sub for sub in document.submissions if sub.session_id != session_id
            ]
            dropped = before - len(document.submissions)

        logger.info(f"🗑️ {campus} deleted session {session_id} and {dropped} submissions")

    def add_jury(self, session_id: str, campus: str, jury_name) -> EvaluationSession:
        return self._add_member(session_id, campus, JURIES, jury_name)

    def remove_jury(self, session_id: str, campus: str, jury_name) -> EvaluationSession:
        return self._remove_member(session_id, campus, JURIES, jury_name)

    def add_student(self, session_id: str, campus: str, student_name) -> EvaluationSession:
        return self._add_member(session_id, campus, STUDENTS, student_name)

    def remove_student(self, session_id: str, campus: str, student_name) -> EvaluationSession:
        return self._remove_member(session_id, campus, STUDENTS, student_name)

    def _add_member(self, session_id: str, campus: str, kind: str, name) -> EvaluationSession:
        """Append name to the jury or student list (duplicates allowed)"""
        if not name:
            raise ValidationError(f"{_MEMBER_LABELS[kind]} name is required.")

        with self.store.mutate() as document:
            session = ensure_owner(_find(document, session_id), campus)
            getattr(session, kind).append(member_name(name))
            result = session.model_copy(deep=True)

        logger.info(f"➕ {campus} added {_MEMBER_LABELS[kind].lower()} {name!r} to session {session_id}")
        return result

    def _remove_member(self, session_id: str, campus: str, kind: str, name) -> EvaluationSession:
        """Drop every entry equal to name; absent names are not an error"""
        name = member_name(name)
        with self.store.mutate() as document:
            session = ensure_owner(_find(document, session_id), campus)
            setattr(session, kind, [member for member in getattr(session, kind) if member != name])
            result = session.model_copy(deep=True)

        logger.info(f"➖ {campus} removed {name!r} from {kind} of session {session_id}")
        return result
