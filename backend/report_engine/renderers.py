"""
Block Renderers for Work Order Documents

Each renderer takes the render context and its layout block and returns
HTML for that block. Renderers are registered in DOCUMENT_RENDERERS for
lookup by block id.
"""

from html import escape as html_escape
import re
from typing import Dict, Callable, Any, Optional

from schemas_work_orders import WorkOrder, NOT_APPLICABLE
from .layout_config import get_document_blocks, SECTION_ORDER
from .templates import generate_css, generate_base_html, render_header

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


# =============================================================================
# FORMATTERS
# =============================================================================

def format_date(value: str) -> str:
    """YYYY-MM-DD -> DD-MM-YYYY. Anything else is returned unchanged."""
    if value and "-" in value and len(value) == 10:
        parts = value.split("-")
        if len(parts) == 3:
            year, month, day = parts
            return f"{day}-{month}-{year}"
    return value


def format_time(value: str) -> str:
    return value


def display_optional(value: Optional[str]) -> str:
    return value if value else NOT_APPLICABLE


def esc(text: Any) -> str:
    if text is None:
        return ''
    return html_escape(str(text), quote=False)


def document_filename(work_order: WorkOrder, branding: dict, extension: str) -> str:
    """
    <prefix>_<workOrderNo>_<DDMMYYYY>.<ext>

    Characters that can't appear in a download name (slashes, spaces, ...)
    in the work order number are replaced with '-'.
    """
    prefix = branding.get("file_prefix", "WorkOrder")
    number = _UNSAFE_FILENAME_CHARS.sub("-", work_order.work_order_no)
    compact_date = format_date(work_order.date).replace("-", "")
    return f"{prefix}_{number}_{compact_date}.{extension}"


class RenderContext:
    """Everything a block renderer needs."""
    def __init__(self, work_order: WorkOrder, branding: dict):
        self.work_order = work_order
        self.branding = branding
        self.date = format_date(work_order.date)


def _field(label: str, value: str, strong: bool = False, css: str = "field") -> str:
    value_class = "value strong" if strong else "value"
    return f'<p class="{css}"><span class="label">{esc(label)}</span> <span class="{value_class}">{esc(value)}</span></p>'


# =============================================================================
# WORK ORDER SECTION
# =============================================================================

def r_header(ctx: RenderContext, block: dict) -> str:
    return render_header(ctx.branding, ctx.work_order.work_order_no)


def r_title(ctx: RenderContext, block: dict) -> str:
    title = esc(ctx.branding.get("document_title", ""))
    subtitle = esc(ctx.branding.get("document_subtitle", ""))
    return f'''<div class="section-title">
            <h3>{title}</h3>
            <p>{subtitle}</p>
        </div>'''


def r_installation_date(ctx: RenderContext, block: dict) -> str:
    wo = ctx.work_order
    return f'''<div class="field-row">
            <div><span class="label">Name of Installation:</span> <span class="value strong">{esc(wo.installation_name)}</span></div>
            <div class="label doc-date">DATE: {esc(ctx.date)}</div>
        </div>'''


def r_work_order_banner(ctx: RenderContext, block: dict) -> str:
    return '<div class="banner large">(WORK ORDER)</div>'


def r_work_order_details(ctx: RenderContext, block: dict) -> str:
    wo = ctx.work_order
    return ''.join([
        _field("Kindly attend following:", wo.work_description, strong=True),
        _field("Details of line:", wo.work_details),
        _field("Name of the land owner:", wo.land_owner, strong=True),
        _field("Leakage Information Report No.:", display_optional(wo.leakage_report_no)),
    ])


def r_materials_heading(ctx: RenderContext, block: dict) -> str:
    return '<div class="banner">Material Supplied by the Contractor</div>'


def r_materials_table(ctx: RenderContext, block: dict) -> str:
    rows = []
    for m in ctx.work_order.materials:
        rows.append(
            f'<tr><td class="col-description">{esc(m.description)}</td>'
            f'<td class="col-quantity">{esc(m.quantity)}</td>'
            f'<td class="col-unit">{esc(m.unit)}</td></tr>'
        )
    return f'''<table class="materials-table">
            <thead><tr><th class="col-description">DESCRIPTION</th><th class="col-quantity">QUANTITY</th><th class="col-unit">UNIT</th></tr></thead>
            <tbody>{"".join(rows)}</tbody>
        </table>'''


def r_installation_signature(ctx: RenderContext, block: dict) -> str:
    return '''<div class="signature-right">
            <p class="label">Signature of instt I/C</p>
            <div class="signature-line"></div>
        </div>'''


# =============================================================================
# COMPLETION CERTIFICATE SECTION
# =============================================================================

def r_certificate_title(ctx: RenderContext, block: dict) -> str:
    return '<div class="section-title"><h3>COMPLETION CERTIFICATE</h3></div>'


def r_certificate_details(ctx: RenderContext, block: dict) -> str:
    wo = ctx.work_order
    return ''.join([
        _field("Certified that the following:", wo.work_description, strong=True),
        _field("Details of Repair:", wo.work_details),
        '<div class="field-row">',
        _field("Clamping:", display_optional(wo.clamping), css="half"),
        _field("Length pipe Changed:", display_optional(wo.length_pipe_changed), css="half"),
        '</div>',
        _field("Jobs Done: -", wo.job_type, strong=True),
        _field("Name of the Agency:", wo.agency_name, strong=True),
        _field("Job taken on:", f"at {ctx.date} hours {format_time(wo.job_taken_time)}", strong=True),
        _field("Job completed on:", f"at {ctx.date} hours {format_time(wo.job_completed_time)}", strong=True),
        _field("Line Retrieved and ope:", f"at hours {display_optional(wo.line_retrieved)}"),
    ])


def r_signatures(ctx: RenderContext, block: dict) -> str:
    blocks = []
    for signer in ("Signature of C &amp; M", "Signature of Instt"):
        blocks.append(f'''<div class="signature-block">
                <p class="signer">{signer}</p>
                <p>With Date:</p>
                <div class="signature-line"></div>
            </div>''')
    return f'<div class="signatures">{"".join(blocks)}</div>'


# =============================================================================
# RENDERER REGISTRY
# =============================================================================

DOCUMENT_RENDERERS: Dict[str, Callable[[RenderContext, dict], str]] = {
    'header': r_header,
    'title': r_title,
    'installation_date': r_installation_date,
    'work_order_banner': r_work_order_banner,
    'work_order_details': r_work_order_details,
    'materials_heading': r_materials_heading,
    'materials_table': r_materials_table,
    'installation_signature': r_installation_signature,
    'certificate_title': r_certificate_title,
    'certificate_details': r_certificate_details,
    'signatures': r_signatures,
}


def render_block(ctx: RenderContext, block: dict) -> str:
    renderer = DOCUMENT_RENDERERS.get(block.get('id'))
    if not renderer:
        return ''
    html = renderer(ctx, block)
    if html and block.get('keepTogether'):
        html = f'<div class="keep-together">{html}</div>'
    return html


def render_document(work_order: WorkOrder, branding: dict) -> str:
    """Document body: every section of the layout, wrapped in .wo-document."""
    ctx = RenderContext(work_order, branding)
    sections = []
    for section in SECTION_ORDER:
        parts = [render_block(ctx, b) for b in get_document_blocks(section)]
        css_class = "certificate" if section == "certificate" else "work-order"
        sections.append(f'<div class="{css_class}">{"".join(p for p in parts if p)}</div>')
    return f'<div class="wo-document">{"".join(sections)}</div>'


def render_document_html(work_order: WorkOrder, branding: dict, page_rule: Optional[str] = None) -> str:
    """Standalone HTML page for export or printing."""
    css = generate_css(branding, page_rule=page_rule)
    body = render_document(work_order, branding)
    title = f"Work Order {work_order.work_order_no}"
    return generate_base_html(title, css, body)
