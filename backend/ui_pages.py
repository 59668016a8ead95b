"""
HTML pages for the Work Order generator.

Form page (editing) and preview page (document + export/print actions).
Both are plain server-rendered HTML; the only script is the export button
handler on the preview page.
"""

from html import escape as html_escape
from typing import Dict, List, Optional

from schemas_work_orders import WorkOrderDraft, WorkOrder, UNIT_CHOICES, JOB_TYPE_CHOICES
from reference_data import INSTALLATIONS, AGENCIES, CATALOG_MATERIALS
from report_engine.templates import generate_css, generate_base_html
from report_engine.renderers import render_document

APP_TITLE = "Digital Work Order Generator"
MATERIAL_PLACEHOLDER = "e.g., 3'' 3LPE PIPE"


def attr(value) -> str:
    """Escape for use inside a double-quoted attribute."""
    if value is None:
        return ''
    return html_escape(str(value), quote=True)


APP_CSS = '''
    body { margin: 0; font-family: Arial, Helvetica, sans-serif; background: #f3f4f6; color: #111827; }
    .navbar { background: #374151; color: #fff; padding: 12px 24px; display: flex; justify-content: space-between; align-items: center; }
    .navbar .brand { font-weight: bold; font-size: 18px; }
    .navbar .tagline { font-size: 12px; color: #e5e7eb; }
    .container { max-width: 960px; margin: 24px auto; padding: 0 16px; }
    .card { background: #fff; border-radius: 12px; box-shadow: 0 4px 16px rgba(0,0,0,0.08); padding: 24px; margin-bottom: 24px; }
    .card h2 { margin: 0 0 16px 0; font-size: 18px; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; }
    .grid-3 { display: grid; grid-template-columns: 1fr 1fr 1fr; gap: 16px; }
    .material-row { display: grid; grid-template-columns: 2fr 1fr 1fr auto; gap: 12px; align-items: end; margin-bottom: 12px; }
    label { display: block; font-size: 13px; font-weight: 600; margin-bottom: 4px; }
    input, textarea { width: 100%; box-sizing: border-box; padding: 8px 10px; border: 2px solid #d1d5db; border-radius: 8px; font-size: 14px; }
    .error { color: #dc2626; font-size: 13px; margin-top: 4px; }
    .banner-error { background: #fee2e2; border: 1px solid #fca5a5; color: #991b1b; padding: 10px 14px; border-radius: 8px; margin-bottom: 16px; }
    .btn { border: none; border-radius: 8px; padding: 10px 18px; font-size: 14px; cursor: pointer; color: #fff; background: #4b5563; }
    .btn-primary { background: #16a34a; font-size: 16px; padding: 12px 28px; }
    .btn-add { background: #7c3aed; }
    .btn-remove { background: #ef4444; padding: 8px 12px; }
    .btn:disabled { opacity: 0.6; cursor: wait; }
    .actions { display: flex; gap: 12px; justify-content: center; flex-wrap: wrap; }
    .default-submit { position: absolute; left: -9999px; }
    .preview-toolbar { display: flex; justify-content: space-between; align-items: center; margin-bottom: 16px; gap: 12px; flex-wrap: wrap; }
    .preview-sheet { background: #fff; box-shadow: 0 4px 16px rgba(0,0,0,0.12); }
'''

EXPORT_SCRIPT = '''
<script>
async function exportDocument(kind, button) {
    if (button.disabled) { return; }
    button.disabled = true;
    const form = document.getElementById('export-form');
    const mode = document.getElementById('pdf-mode');
    let url = '/work-orders/export/' + kind;
    if (kind === 'pdf' && mode) { url += '?mode=' + encodeURIComponent(mode.value); }
    try {
        const response = await fetch(url, { method: 'POST', body: new FormData(form) });
        if (!response.ok) {
            let detail = 'Error generating ' + kind.toUpperCase() + '. Please try again.';
            try { detail = (await response.json()).detail || detail; } catch (e) {}
            alert(detail);
            return;
        }
        const disposition = response.headers.get('Content-Disposition') || '';
        const match = disposition.match(/filename="?([^";]+)"?/);
        const blob = await response.blob();
        const link = document.createElement('a');
        link.href = URL.createObjectURL(blob);
        link.download = match ? match[1] : ('work_order.' + kind);
        document.body.appendChild(link);
        link.click();
        document.body.removeChild(link);
        URL.revokeObjectURL(link.href);
    } catch (error) {
        console.error('Export failed:', error);
        alert('Error generating ' + kind.toUpperCase() + '. Please try again.');
    } finally {
        button.disabled = false;
    }
}
</script>
'''


def _navbar() -> str:
    return f'''<nav class="navbar no-print">
        <div><div class="brand">ONGC Mehasana</div><div class="tagline">Work Order Management</div></div>
        <div class="tagline">{APP_TITLE}</div>
    </nav>'''


def _datalist(list_id: str, values: List[str]) -> str:
    options = ''.join(f'<option value="{attr(v)}">' for v in values)
    return f'<datalist id="{list_id}">{options}</datalist>'


def _input(name: str, label: str, value: Optional[str], errors: Dict[str, str],
           input_type: str = "text", placeholder: str = "", list_id: str = "") -> str:
    list_attr = f' list="{list_id}"' if list_id else ''
    error = errors.get(name)
    error_html = f'<p class="error">{html_escape(error)}</p>' if error else ''
    return f'''<div>
            <label for="{name}">{html_escape(label)}</label>
            <input type="{input_type}" id="{name}" name="{name}" value="{attr(value)}" placeholder="{attr(placeholder)}"{list_attr}>
            {error_html}
        </div>'''


def _material_rows(draft: WorkOrderDraft, errors: Dict[str, str]) -> str:
    rows = []
    can_remove = len(draft.materials) > 1
    for i, m in enumerate(draft.materials):
        remove_html = ''
        if can_remove:
            remove_html = f'<button type="submit" class="btn btn-remove" name="action" value="remove_material:{i}" title="Remove material item">Remove</button>'
        rows.append(f'''<div class="material-row">
            {_input(f"materials-{i}-description", "Material Description *", m.description, _material_errors(errors, i, "description"), placeholder=MATERIAL_PLACEHOLDER, list_id="catalog-materials")}
            {_input(f"materials-{i}-quantity", "Quantity *", m.quantity, _material_errors(errors, i, "quantity"), placeholder="28.800")}
            {_input(f"materials-{i}-unit", "Unit *", m.unit, _material_errors(errors, i, "unit"), placeholder="Select Unit", list_id="units")}
            <div>{remove_html}</div>
        </div>''')
    return ''.join(rows)


def _material_errors(errors: Dict[str, str], index: int, field: str) -> Dict[str, str]:
    """Re-key materials.<i>.<field> errors to the flat input name."""
    message = errors.get(f"materials.{index}.{field}")
    return {f"materials-{index}-{field}": message} if message else {}


def render_form_page(draft: WorkOrderDraft, session_id: str, errors: Optional[Dict[str, str]] = None) -> str:
    errors = errors or {}
    d = draft

    banner = ''
    if errors:
        banner = '<div class="banner-error">Please correct the highlighted fields before previewing.</div>'
    materials_error = errors.get("materials")
    materials_error_html = f'<p class="error">{html_escape(materials_error)}</p>' if materials_error else ''
    details_error = errors.get("work_details")
    details_error_html = f'<p class="error">{html_escape(details_error)}</p>' if details_error else ''

    body = f'''{_navbar()}
    <div class="container">
        <form method="post" action="/work-orders/form">
            <button type="submit" class="default-submit" name="action" value="preview" tabindex="-1">Preview</button>
            <input type="hidden" name="session_id" value="{attr(session_id)}">
            {banner}
            <div class="card">
                <h2>Basic Information</h2>
                <div class="grid">
                    {_input("work_order_no", "Work Order No. *", d.work_order_no, errors, placeholder="Enter work order number")}
                    {_input("installation_name", "Installation Name *", d.installation_name, errors, placeholder="e.g., Santhal Main", list_id="installations")}
                    {_input("date", "Date *", d.date, errors, input_type="date")}
                    {_input("agency_name", "Agency Name *", d.agency_name, errors, placeholder="e.g., NAVBHARAT CONSTRUCTION", list_id="agencies")}
                </div>
            </div>
            <div class="card">
                <h2>Work Description</h2>
                {_input("work_description", "Work Description *", d.work_description, errors, placeholder="e.g., SN#15 WATER INJECTION HEADER MODIFICATION")}
                <div style="margin-top: 12px;">
                    <label for="work_details">Details of Line/Work *</label>
                    <textarea id="work_details" name="work_details" rows="3" placeholder="Detailed description of the work to be performed">{html_escape(d.work_details or "")}</textarea>
                    {details_error_html}
                </div>
                <div class="grid" style="margin-top: 12px;">
                    {_input("land_owner", "Name of the Land Owner", d.land_owner, errors)}
                </div>
            </div>
            <div class="card">
                <h2>Materials List</h2>
                {materials_error_html}
                {_material_rows(d, errors)}
                <button type="submit" class="btn btn-add" name="action" value="add_material">+ Add Material</button>
            </div>
            <div class="card">
                <h2>Job Timing &amp; Type</h2>
                <div class="grid-3">
                    {_input("job_taken_time", "Job Taken Time *", d.job_taken_time, errors, input_type="time")}
                    {_input("job_completed_time", "Job Completed Time *", d.job_completed_time, errors, input_type="time")}
                    {_input("job_type", "Job Type", d.job_type, errors, list_id="job-types")}
                </div>
            </div>
            <div class="card">
                <h2>Optional Information</h2>
                <div class="grid">
                    {_input("leakage_report_no", "Leakage Information Report No.", d.leakage_report_no, errors, placeholder="Enter if applicable")}
                    {_input("clamping", "Clamping", d.clamping, errors, placeholder="Enter if applicable")}
                    {_input("length_pipe_changed", "Length Pipe Changed", d.length_pipe_changed, errors, placeholder="Enter if applicable")}
                    {_input("line_retrieved", "Line Retrieved and Operated (hours)", d.line_retrieved, errors, placeholder="Enter if applicable")}
                </div>
            </div>
            <div class="actions">
                <button type="submit" class="btn btn-primary" name="action" value="preview">Preview Document</button>
            </div>
        </form>
        {_datalist("installations", INSTALLATIONS)}
        {_datalist("agencies", AGENCIES)}
        {_datalist("catalog-materials", CATALOG_MATERIALS)}
        {_datalist("units", UNIT_CHOICES)}
        {_datalist("job-types", JOB_TYPE_CHOICES)}
    </div>'''

    return generate_base_html(f"{APP_TITLE} - Create Work Order", APP_CSS, body)


def render_preview_page(work_order: WorkOrder, branding: dict, session_id: str, pdf_mode: str = "vector") -> str:
    payload = work_order.model_dump_json()
    document = render_document(work_order, branding)
    css = APP_CSS + generate_css(branding)

    mode_options = ''.join(
        f'<option value="{m}"{" selected" if m == pdf_mode else ""}>{label}</option>'
        for m, label in (("vector", "PDF (vector)"), ("raster", "PDF (image)"))
    )

    body = f'''{_navbar()}
    <div class="container">
        <div class="preview-toolbar no-print">
            <form method="post" action="/work-orders/edit">
                <input type="hidden" name="payload" value="{attr(payload)}">
                <input type="hidden" name="session_id" value="{attr(session_id)}">
                <button type="submit" class="btn">&larr; Back to Edit</button>
            </form>
            <form id="export-form" onsubmit="return false;">
                <input type="hidden" name="payload" value="{attr(payload)}">
                <input type="hidden" name="session_id" value="{attr(session_id)}">
                <select id="pdf-mode">{mode_options}</select>
                <button type="button" class="btn btn-primary" onclick="exportDocument('pdf', this)">Download PDF</button>
                <button type="button" class="btn" onclick="exportDocument('doc', this)">Download DOC</button>
                <button type="button" class="btn" onclick="window.print()">Print</button>
            </form>
        </div>
        <div class="preview-sheet">
            {document}
        </div>
    </div>
    {EXPORT_SCRIPT}'''

    return generate_base_html(f"Work Order {work_order.work_order_no} - Preview", css, body)
