from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_repository, require_token
from persistence.contracts import CaseRepository
from services.exports import update_filing_settings

router = APIRouter(dependencies=[Depends(require_token)])


@router.patch("/cases/{case_id}/drafts/{draft_id}/filing", tags=["Filing"])
async def patch_filing_settings(
    case_id: str,
    draft_id: str,
    patch: Annotated[dict[str, Any], Body()],
    repository: Annotated[CaseRepository, Depends(get_repository)],
):
    """Merge a partial filing-settings patch into the draft and persist it."""
    merged = update_filing_settings(case_id, draft_id, patch, repository=repository)
    return merged.to_payload()
