from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool

from api.deps import (
    get_layout_options,
    get_repository,
    get_signature_store,
    get_stamper,
    require_token,
)
from compiler.bates import BatesStamper, parse_bates_options
from compiler.layout import LayoutOptions
from persistence.contracts import CaseRepository, SignatureStore
from services.exports import ExportedFile, export_draft_docx, export_draft_pdf

router = APIRouter(dependencies=[Depends(require_token)])


def _file_response(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": exported.content_disposition},
    )


@router.get("/cases/{case_id}/drafts/{draft_id}/export/pdf", tags=["Export"])
async def export_pdf(
    case_id: str,
    draft_id: str,
    repository: Annotated[CaseRepository, Depends(get_repository)],
    signatures: Annotated[SignatureStore, Depends(get_signature_store)],
    options: Annotated[LayoutOptions, Depends(get_layout_options)],
    stamper: Annotated[Optional[BatesStamper], Depends(get_stamper)],
    prefix: Optional[str] = None,
    bates_start: Annotated[Optional[str], Query(alias="batesStart")] = None,
    bates_width: Annotated[Optional[str], Query(alias="batesWidth")] = None,
):
    """Compile a draft into a court-formatted PDF."""
    bates = parse_bates_options(prefix, bates_start, bates_width)
    exported = await run_in_threadpool(
        export_draft_pdf,
        case_id,
        draft_id,
        repository=repository,
        signatures=signatures,
        options=options,
        bates=bates,
        stamper=stamper,
    )
    return _file_response(exported)


@router.get("/cases/{case_id}/drafts/{draft_id}/export/docx", tags=["Export"])
async def export_docx(
    case_id: str,
    draft_id: str,
    repository: Annotated[CaseRepository, Depends(get_repository)],
    signatures: Annotated[SignatureStore, Depends(get_signature_store)],
):
    """Export a draft as an editable Word document."""
    exported = await run_in_threadpool(
        export_draft_docx,
        case_id,
        draft_id,
        repository=repository,
        signatures=signatures,
    )
    return _file_response(exported)
