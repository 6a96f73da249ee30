from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.deps import get_repository, require_token
from persistence.contracts import CaseRepository
from readiness.analyzer import analyze_filing_readiness
from schemas.requests import FilingReadinessInput
from schemas.responses import ReadinessResult
from services.exports import analyze_draft_readiness

router = APIRouter(dependencies=[Depends(require_token)])


@router.get(
    "/cases/{case_id}/drafts/{draft_id}/readiness",
    response_model=ReadinessResult,
    tags=["Readiness"],
)
async def draft_readiness(
    case_id: str,
    draft_id: str,
    repository: Annotated[CaseRepository, Depends(get_repository)],
):
    """Run the readiness checks against a stored draft."""
    return await run_in_threadpool(
        analyze_draft_readiness, case_id, draft_id, repository=repository
    )


@router.post("/readiness/analyze", response_model=ReadinessResult, tags=["Readiness"])
async def analyze(payload: FilingReadinessInput):
    """Stateless analysis of a draft supplied in the request body."""
    return analyze_filing_readiness(payload)
