"""
Work Order Router - form, preview and export

Pages (HTML):
- GET  /                          new form
- POST /work-orders/form          add/remove material rows, or submit for preview
- POST /work-orders/edit          back from the preview to the form
- POST /work-orders/export/pdf    PDF download of the previewed work order
- POST /work-orders/export/doc    plain-text .doc download

API (JSON), mounted under /api/work-orders:
- GET  /defaults, POST /validate, /preview, /pdf, /doc
"""

from fastapi import APIRouter, HTTPException, Request, Query, Form
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError
from typing import Optional, Literal
import logging
import uuid

import app_config
from schemas_work_orders import WorkOrderDraft, WorkOrder
from work_order_helpers import (
    new_draft, append_material, remove_material, validate_work_order,
    draft_from_form, parse_form_action, ExportGuard,
)
from report_engine.branding_config import get_branding
from report_engine.renderers import render_document_html
from report_engine.pdf_export import generate_pdf, ExportError, PDF_MIME_TYPE
from report_engine.text_export import render_text_document, text_filename, DOC_MIME_TYPE
from ui_pages import render_form_page, render_preview_page

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter()

export_guard = ExportGuard()

PdfMode = Literal["vector", "raster"]


# =============================================================================
# HELPERS
# =============================================================================

def _new_session_id() -> str:
    return uuid.uuid4().hex


def _download(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _require_valid(draft: WorkOrderDraft) -> WorkOrder:
    result = validate_work_order(draft)
    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail={"message": "Work order is incomplete", "errors": [e.model_dump() for e in result.errors]},
        )
    return result.work_order


def _load_payload(payload: Optional[str]) -> WorkOrderDraft:
    """Hidden-field JSON from the preview page back into a draft."""
    if not payload:
        raise HTTPException(status_code=400, detail="Missing work order payload")
    try:
        return WorkOrderDraft.model_validate_json(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid work order payload")


def _export_pdf(work_order: WorkOrder, key: str, mode: Optional[str], theme: Optional[str] = None) -> Response:
    if not export_guard.acquire(key):
        raise HTTPException(status_code=409, detail="An export is already in progress for this work order")
    try:
        pdf, filename = generate_pdf(work_order, get_branding(theme), mode)
    except ExportError as e:
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        export_guard.release(key)
    return _download(pdf, PDF_MIME_TYPE, filename)


def _export_doc(work_order: WorkOrder, key: str, theme: Optional[str] = None) -> Response:
    if not export_guard.acquire(key):
        raise HTTPException(status_code=409, detail="An export is already in progress for this work order")
    try:
        branding = get_branding(theme)
        content = render_text_document(work_order, branding)
        filename = text_filename(work_order, branding)
    finally:
        export_guard.release(key)
    logger.info(f"Generated text export {filename}")
    return _download(content.encode("utf-8"), DOC_MIME_TYPE, filename)


# =============================================================================
# PAGES
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def new_work_order_form():
    return HTMLResponse(content=render_form_page(new_draft(), _new_session_id()))


@router.post("/work-orders/form", response_class=HTMLResponse)
async def submit_work_order_form(request: Request):
    form = await request.form()
    draft = draft_from_form(form)
    session_id = form.get("session_id") or _new_session_id()
    action, index = parse_form_action(form.get("action"))

    if action == "add_material":
        append_material(draft)
        return HTMLResponse(content=render_form_page(draft, session_id))

    if action == "remove_material":
        if not remove_material(draft, index):
            logger.debug(f"Ignored removal of material row {index} ({len(draft.materials)} rows)")
        return HTMLResponse(content=render_form_page(draft, session_id))

    result = validate_work_order(draft)
    if not result.ok:
        return HTMLResponse(
            content=render_form_page(draft, session_id, result.errors_by_field()),
            status_code=422,
        )

    html = render_preview_page(result.work_order, get_branding(), session_id, app_config.PDF_RENDER_MODE)
    return HTMLResponse(content=html)


@router.post("/work-orders/edit", response_class=HTMLResponse)
def edit_work_order(payload: Optional[str] = Form(None), session_id: Optional[str] = Form(None)):
    draft = _load_payload(payload)
    return HTMLResponse(content=render_form_page(draft, session_id or _new_session_id()))


@router.post("/work-orders/export/pdf")
def export_work_order_pdf(
    mode: Optional[PdfMode] = None,
    payload: Optional[str] = Form(None),
    session_id: Optional[str] = Form(None),
):
    work_order = _require_valid(_load_payload(payload))
    return _export_pdf(work_order, session_id or work_order.work_order_no, mode)


@router.post("/work-orders/export/doc")
def export_work_order_doc(payload: Optional[str] = Form(None), session_id: Optional[str] = Form(None)):
    work_order = _require_valid(_load_payload(payload))
    return _export_doc(work_order, session_id or work_order.work_order_no)


# =============================================================================
# JSON API
# =============================================================================

@api_router.get("/defaults")
async def get_work_order_defaults():
    return new_draft()


@api_router.post("/validate")
async def validate_work_order_draft(draft: WorkOrderDraft):
    result = validate_work_order(draft)
    return {
        "ok": result.ok,
        "errors": [e.model_dump() for e in result.errors],
        "work_order": result.work_order.model_dump() if result.work_order else None,
    }


@api_router.post("/preview", response_class=HTMLResponse)
async def preview_work_order(draft: WorkOrderDraft, theme: Optional[str] = None):
    work_order = _require_valid(draft)
    return HTMLResponse(content=render_document_html(work_order, get_branding(theme)))


@api_router.post("/pdf")
def get_work_order_pdf(
    draft: WorkOrderDraft,
    mode: Optional[PdfMode] = None,
    theme: Optional[str] = None,
    session_id: Optional[str] = Query(None),
):
    work_order = _require_valid(draft)
    return _export_pdf(work_order, session_id or work_order.work_order_no, mode, theme)


@api_router.post("/doc")
def get_work_order_doc(
    draft: WorkOrderDraft,
    theme: Optional[str] = None,
    session_id: Optional[str] = Query(None),
):
    work_order = _require_valid(draft)
    return _export_doc(work_order, session_id or work_order.work_order_no, theme)
