import base64
import io

from PIL import Image

from work_order_helpers import validate_work_order
from report_engine.branding_config import get_branding, load_logo, DEFAULT_BRANDING
from report_engine.renderers import (
    format_date, display_optional, document_filename, render_document, render_document_html,
)
from report_engine.templates import generate_css


def _work_order(draft):
    return validate_work_order(draft).work_order


def _branding(tmp_path, theme=None):
    return get_branding(theme, logo_path=str(tmp_path / "missing.png"))


def test_format_date():
    assert format_date("2025-03-05") == "05-03-2025"
    assert format_date("05/03/2025") == "05/03/2025"
    assert format_date("") == ""


def test_display_optional():
    assert display_optional(None) == "N/A"
    assert display_optional("") == "N/A"
    assert display_optional("2 MTR") == "2 MTR"


def test_document_filename(draft, tmp_path):
    wo = _work_order(draft)
    assert document_filename(wo, _branding(tmp_path), "pdf") == "ONGC_WorkOrder_WO-100_05032025.pdf"


def test_document_filename_replaces_unsafe_characters(draft, tmp_path):
    draft.work_order_no = "WO/12 A"
    wo = _work_order(draft)
    assert document_filename(wo, _branding(tmp_path), "doc") == "ONGC_WorkOrder_WO-12-A_05032025.doc"


def test_document_contains_work_order_fields(draft, tmp_path):
    html = render_document(_work_order(draft), _branding(tmp_path))
    assert html.startswith('<div class="wo-document">')
    assert "Work Order no- WO-100" in html
    assert "DATE: 05-03-2025" in html
    assert "OIL AND NATURAL GAS CORPORATION" in html
    assert "WORK ORDER AND COMPLETION CERTIFICATION" in html
    assert "(WORK ORDER)" in html
    assert "COMPLETION CERTIFICATE" in html
    assert (
        '<tr><td class="col-description">3\'\' PIPE</td>'
        '<td class="col-quantity">10</td>'
        '<td class="col-unit">MTR</td></tr>'
    ) in html
    assert "at 05-03-2025 hours 10:00" in html
    assert "at 05-03-2025 hours 18:00" in html


def test_blank_optionals_render_as_not_applicable(draft, tmp_path):
    html = render_document(_work_order(draft), _branding(tmp_path))
    assert '<span class="label">Leakage Information Report No.:</span> <span class="value">N/A</span>' in html
    assert '<span class="label">Clamping:</span> <span class="value">N/A</span>' in html
    assert '<span class="label">Length pipe Changed:</span> <span class="value">N/A</span>' in html
    assert "at hours N/A" in html


def test_text_is_escaped(draft, tmp_path):
    draft.work_details = "<script>alert(1)</script> & more"
    html = render_document(_work_order(draft), _branding(tmp_path))
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt; &amp; more" in html


def test_keep_together_blocks(draft, tmp_path):
    html = render_document(_work_order(draft), _branding(tmp_path))
    assert html.count('<div class="keep-together">') == 3


def test_one_table_row_per_material(draft, tmp_path):
    draft.materials = draft.materials * 3
    html = render_document(_work_order(draft), _branding(tmp_path))
    assert html.count('<td class="col-description">') == 3


def test_document_html_is_standalone_page(draft, tmp_path):
    page = render_document_html(_work_order(draft), _branding(tmp_path))
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Work Order WO-100</title>" in page
    assert "@page { size: A4 portrait; margin: 12mm; }" in page


def test_unknown_theme_falls_back_to_classic(tmp_path):
    branding = _branding(tmp_path, theme="neon")
    assert branding["theme"] == "classic"
    assert branding["logo_data"] is None


def test_themes_change_css(tmp_path):
    classic = generate_css(_branding(tmp_path, "classic"))
    modern = generate_css(_branding(tmp_path, "modern"))
    assert "Times New Roman" in classic
    assert "Times New Roman" not in modern


def test_logo_is_embedded_when_readable(draft, tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGB", (8, 8), "red").save(path, "PNG")

    data, mime = load_logo(str(path))
    assert mime == "image/png"
    assert base64.b64decode(data) == path.read_bytes()

    branding = get_branding(logo_path=str(path))
    html = render_document(_work_order(draft), branding)
    assert 'src="data:image/png;base64,' in html


def test_unreadable_logo_is_skipped(draft, tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"not an image")
    assert load_logo(str(path)) is None

    html = render_document(_work_order(draft), get_branding(logo_path=str(path)))
    assert "<img" not in html
    assert "Work Order no- WO-100" in html


def test_default_branding_is_not_mutated(tmp_path):
    path = tmp_path / "logo.png"
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "blue").save(buffer, "PNG")
    path.write_bytes(buffer.getvalue())
    get_branding("modern", logo_path=str(path))
    assert DEFAULT_BRANDING["logo_data"] is None
    assert DEFAULT_BRANDING["theme"] == "classic"
