"""
Plain-text work order export.

Produces the fixed-width text version of the document. It is served with a
Word MIME type and a .doc extension so it opens in a word processor, but the
content is plain text, not a binary document format.
"""

from schemas_work_orders import WorkOrder, MaterialLine
from .renderers import format_date, display_optional, document_filename

DOC_MIME_TYPE = "application/msword"

DESCRIPTION_WIDTH = 42
QUANTITY_WIDTH = 10
UNIT_GAP = " " * 7

PAGE_WIDTH = 96


def _center(text: str) -> str:
    return text.center(PAGE_WIDTH).rstrip()


def _spread(left: str, right: str, width: int = PAGE_WIDTH) -> str:
    """left and right on one line, right flush to width (at least 4 spaces apart)."""
    gap = max(width - len(left) - len(right), 4)
    return f"{left}{' ' * gap}{right}"


def format_material_line(material: MaterialLine) -> str:
    """Description padded/truncated, quantity right-aligned, then unit."""
    description = material.description[:DESCRIPTION_WIDTH].ljust(DESCRIPTION_WIDTH)
    quantity = material.quantity.rjust(QUANTITY_WIDTH)
    return f"{description}{quantity}{UNIT_GAP}{material.unit}"


def render_text_document(work_order: WorkOrder, branding: dict) -> str:
    wo = work_order
    date = format_date(wo.date)

    lines = [
        _center(branding.get("organization_name", "")),
        _center(branding.get("unit_name", "")),
        "",
        _center(f"Work Order no- {wo.work_order_no}"),
        "",
        _center(branding.get("document_title", "")),
        _center(branding.get("document_subtitle", "")),
        "",
        _spread(f"Name of Installation: {wo.installation_name}", f"DATE: {date}"),
        _center("(WORK ORDER)"),
        "",
        f"Kindly attend following: {wo.work_description}",
        f"Details of line: {wo.work_details}",
        f"Name of the land owner: {wo.land_owner}",
        f"Leakage Information Report No. {display_optional(wo.leakage_report_no)}",
        "",
        _center("Material Supplied by the Contractor"),
        "",
    ]
    lines.extend(format_material_line(m) for m in wo.materials)
    lines.extend([
        "",
        "Signature of instt I/C".rjust(PAGE_WIDTH),
        "",
        "",
        _center("COMPLETION CERTIFICATE"),
        "",
        f"Certified that the following: {wo.work_description}",
        f"Details of Repair: {wo.work_details}",
        f"Clamping: {display_optional(wo.clamping)}",
        f"Length pipe Changed: {display_optional(wo.length_pipe_changed)}",
        f"Jobs Done: - {wo.job_type}",
        f"Name of the Agency: {wo.agency_name}",
        f"Job taken on: at {date} hours {wo.job_taken_time}",
        f"Job completed on: at {date} hours {wo.job_completed_time}",
        f"Line Retrieved and ope: at hours {display_optional(wo.line_retrieved)}",
        "",
        "",
        _spread("Signature of C & M", "Signature of Instt"),
        _spread("With Date:", "With Date:".ljust(len("Signature of Instt"))),
        "",
    ])
    return "\n".join(lines) + "\n"


def text_filename(work_order: WorkOrder, branding: dict) -> str:
    return document_filename(work_order, branding, "doc")
