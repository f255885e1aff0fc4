"""
Evaluation submission and results endpoints
"""
from fastapi import APIRouter, Depends

from evaltrack.api.deps import current_identity, get_aggregator, request_body
from evaltrack.core.aggregator import SubmissionAggregator
from evaltrack.models import CampusIdentity


router = APIRouter(prefix="/api", tags=["evaluations"])


@router.post("/submitEvaluation")
def submit_evaluation(
    identity: CampusIdentity = Depends(current_identity),
    payload: dict = Depends(request_body),
    aggregator: SubmissionAggregator = Depends(get_aggregator),
):
    """
    Submit one jury's evaluation of one student

    Request:
        {
            "sessionId": "<uuid>",
            "juryName": "Hugo",
            "studentName": "Fabien",
            "introductionTeam": "4",   # ... 18 criteria, numbers or numeric strings
            "studentComments": "Well done!"
        }
    """
    aggregator.submit(payload, identity.campus)
    return {"message": "Evaluation submitted successfully!"}


@router.get("/resultsWithAverages")
def results_with_averages(
    identity: CampusIdentity = Depends(current_identity),
    aggregator: SubmissionAggregator = Depends(get_aggregator),
):
    """Raw submissions, per-student averages and sessions of the caller's campus"""
    return aggregator.results_with_averages(identity.campus)
