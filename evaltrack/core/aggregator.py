"""
Submission aggregator - evaluation submissions and per-student averages

Averages are recomputed on every read and never persisted:

  avg(criterion) = sum(criterion over submissions) / count

for each (sessionId, studentName) pair, in the order each pair first
appears in the stored submissions.
"""
import logging
import math
import re
from typing import Dict, List, Tuple

from pydantic.alias_generators import to_camel

from evaltrack.core.gate import ensure_owner
from evaltrack.core.registry import member_name
from evaltrack.core.store import MemoryDocumentStore
from evaltrack.errors import ValidationError
from evaltrack.models import CRITERIA, Submission


logger = logging.getLogger(__name__)

# Plain decimal numbers: optional sign, digits, optional fraction and exponent
SCORE_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_score(value, field: str) -> float:
    """
    Parse one criterion score from form input

    Args:
        value: Number or numeric string as sent by the client
        field: Wire name of the criterion (for the error message)

    Returns:
        Score as float

    Raises:
        ValidationError: missing, boolean, non-numeric or non-finite value
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid score for {field}.")
    if isinstance(value, str):
        value = value.strip()
        if not SCORE_PATTERN.fullmatch(value):
            raise ValidationError(f"Invalid score for {field}.")
    elif not isinstance(value, (int, float)):
        raise ValidationError(f"Invalid score for {field}.")
    score = float(value)
    if not math.isfinite(score):
        raise ValidationError(f"Invalid score for {field}.")
    return score


def compute_averages(submissions: List[Submission]) -> List[dict]:
    """
    Group submissions by (session, student) and average every criterion

    Returns:
        One row per group: sessionId, studentName, <criterion>Avg, count
    """
    groups: Dict[Tuple[str, str], dict] = {}

    for sub in submissions:
        key = (sub.session_id, sub.student_name)
        if key not in groups:
            groups[key] = {"totals": dict.fromkeys(CRITERIA, 0.0), "count": 0}
        group = groups[key]
        for criterion in CRITERIA:
            group["totals"][criterion] += getattr(sub, criterion)
        group["count"] += 1

    rows = []
    for (session_id, student_name), group in groups.items():
        row = {"sessionId": session_id, "studentName": student_name}
        for criterion in CRITERIA:
            row[f"{to_camel(criterion)}Avg"] = group["totals"][criterion] / group["count"]
        row["count"] = group["count"]
        rows.append(row)
    return rows


class SubmissionAggregator:

    def __init__(self, store: MemoryDocumentStore):
        self.store = store

    def submit(self, payload: dict, campus: str) -> Submission:
        """
        Record one jury's evaluation of one student

        Args:
            payload: Form body (sessionId, juryName, studentName, the 18
                criteria, studentComments)
            campus: Caller's campus

        Raises:
            ValidationError: unknown session, jury or student, or bad score
            Forbidden: session belongs to another campus
        """
        session_id = payload.get("sessionId")
        jury_name = member_name(payload.get("juryName"))
        student_name = member_name(payload.get("studentName"))

        with self.store.mutate() as document:
            session = next((s for s in document.sessions if s.id == session_id), None)
            if session is None:
                raise ValidationError("Session does not exist.")
            ensure_owner(session, campus)
            if jury_name not in session.juries:
                raise ValidationError("Jury does not exist in this session.")
            if student_name not in session.students:
                raise ValidationError("Student does not exist in this session.")

            scores = {
                criterion: parse_score(payload.get(to_camel(criterion)), to_camel(criterion))
                for criterion in CRITERIA
            }
            submission = Submission(
                session_id=session_id,
                jury_name=jury_name,
                student_name=student_name,
                student_comments=str(payload.get("studentComments") or ""),
                **scores
            )
            document.submissions.append(submission)

        logger.info(f"📝 {campus} | session {session_id} | {jury_name} evaluated {student_name}")
        return submission.model_copy()

    def results_with_averages(self, campus: str) -> dict:
        """
        Raw submissions, per-student averages and sessions of one campus

        Returns:
            {"rawSubmissions": [...], "aggregated": [...], "sessions": [...]}
        """
        document = self.store.snapshot()
        sessions = [s for s in document.sessions if s.campus == campus]
        session_ids = {s.id for s in sessions}
        raw = [sub for sub in document.submissions if sub.session_id in session_ids]

        return {
            "rawSubmissions": [sub.to_wire() for sub in raw],
            "aggregated": compute_averages(raw),
            "sessions": [s.to_wire() for s in sessions],
        }
