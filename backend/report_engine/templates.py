"""
Document Templates

CSS generation and base HTML for the work order document. Styles are built
from the branding/theme values; all document rules are scoped under
.wo-document so the same CSS can sit inside the preview page.
"""

from html import escape as html_escape
from typing import Optional

from .branding_config import get_logo_data_url, get_logo_size_px


def page_rule_for(branding: dict) -> str:
    """@page rule for paginated output (vector PDF and printing)."""
    size = branding.get("page_size", "A4")
    margin = branding.get("page_margin", "12mm")
    return f"@page {{ size: {size} portrait; margin: {margin}; }}"


def generate_css(branding: dict, page_rule: Optional[str] = None) -> str:
    """Generate complete CSS for the work order document."""
    font_family = branding.get("font_family", "'Times New Roman', Times, serif")
    body_font_size = branding.get("body_font_size", "14px")
    heading_font_size = branding.get("heading_font_size", "20px")
    section_font_size = branding.get("section_font_size", "18px")
    text_color = branding.get("text_color", "#000000")
    muted_color = branding.get("muted_color", "#333333")
    rule_color = branding.get("rule_color", "#000000")
    rule_width = branding.get("rule_width", "2px")
    th_background = branding.get("table_header_background", "transparent")
    cell_padding = branding.get("cell_padding", "12px")
    line_height = branding.get("line_height", "1.6")

    logo_size = get_logo_size_px(branding)
    page_rule = page_rule or page_rule_for(branding)

    return f'''
        {page_rule}

        .wo-document, .wo-document * {{ margin: 0; padding: 0; box-sizing: border-box; }}

        .wo-document {{
            font-family: {font_family};
            font-size: {body_font_size};
            line-height: {line_height};
            color: {text_color};
            background: #ffffff;
            max-width: 800px;
            margin: 0 auto;
            padding: 40px;
        }}

        /* Header */
        .wo-document .doc-header {{
            text-align: center;
            border-bottom: {rule_width} solid {rule_color};
            padding-bottom: 16px;
            margin-bottom: 24px;
        }}

        .wo-document .doc-header-brand {{
            display: flex;
            align-items: center;
            justify-content: center;
            margin-bottom: 8px;
        }}

        .wo-document .logo {{
            height: {logo_size};
            width: auto;
            margin-right: 16px;
        }}

        .wo-document .org-name {{
            font-size: {heading_font_size};
            font-weight: bold;
            letter-spacing: 1px;
            margin-bottom: 4px;
        }}

        .wo-document .unit-name {{
            font-size: {section_font_size};
            font-weight: 600;
            color: {muted_color};
        }}

        .wo-document .wo-number {{
            font-weight: 600;
        }}

        /* Section titles */
        .wo-document .section-title {{
            text-align: center;
            margin-bottom: 24px;
        }}

        .wo-document .section-title h3 {{
            font-size: {section_font_size};
            font-weight: bold;
            letter-spacing: 1px;
            text-transform: uppercase;
        }}

        .wo-document .section-title p {{
            margin-top: 4px;
            font-weight: 500;
        }}

        .wo-document .banner {{
            text-align: center;
            font-weight: bold;
            border-top: 1px solid {rule_color};
            border-bottom: 1px solid {rule_color};
            padding: 8px;
            margin: 16px 0;
        }}

        .wo-document .banner.large {{
            font-size: {section_font_size};
        }}

        /* Fields */
        .wo-document .field-row {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 16px;
        }}

        .wo-document .field-row .half {{
            width: 48%;
        }}

        .wo-document .field {{
            margin-bottom: 16px;
        }}

        .wo-document .label {{
            font-weight: 600;
        }}

        .wo-document .value {{
            margin-left: 8px;
        }}

        .wo-document .value.strong {{
            font-weight: bold;
        }}

        /* Materials table */
        .wo-document .materials-table {{
            width: 100%;
            border-collapse: collapse;
            border: {rule_width} solid {rule_color};
            margin: 24px 0;
        }}

        .wo-document .materials-table th {{
            padding: {cell_padding};
            font-weight: bold;
            background: {th_background};
            border-bottom: {rule_width} solid {rule_color};
            border-right: 1px solid {rule_color};
        }}

        .wo-document .materials-table td {{
            padding: {cell_padding};
            border-bottom: 1px solid {rule_color};
            border-right: 1px solid {rule_color};
        }}

        .wo-document .col-description {{ text-align: left; }}
        .wo-document .col-quantity {{ text-align: center; font-weight: bold; }}
        .wo-document .col-unit {{ text-align: center; font-weight: 600; }}

        /* Signatures */
        .wo-document .signature-right {{
            text-align: right;
            margin-top: 32px;
            padding-top: 24px;
        }}

        .wo-document .signature-line {{
            border-bottom: {rule_width} solid {rule_color};
            width: 200px;
            margin: 12px 0 0 auto;
        }}

        .wo-document .certificate {{
            border-top: {rule_width} solid {rule_color};
            padding-top: 32px;
        }}

        .wo-document .signatures {{
            display: flex;
            justify-content: space-between;
            margin-top: 48px;
            padding-top: 24px;
        }}

        .wo-document .signature-block {{
            text-align: center;
            width: 45%;
        }}

        .wo-document .signature-block .signer {{
            font-weight: bold;
            font-size: {section_font_size};
            margin-bottom: 8px;
        }}

        .wo-document .signature-block .signature-line {{
            width: 100%;
            margin-top: 48px;
        }}

        .wo-document .keep-together {{
            page-break-inside: avoid;
            break-inside: avoid;
        }}

        /* Print: only the document, no app chrome */
        @media print {{
            .no-print {{ display: none !important; }}
            body {{ background: #ffffff; margin: 0; }}
            .wo-document {{ max-width: none; padding: 0; box-shadow: none; }}
            .wo-document table, .wo-document tr {{ page-break-inside: avoid; }}
        }}
    '''


def generate_base_html(title: str, css: str, body: str) -> str:
    """Generate complete HTML document with CSS and body content."""
    return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{html_escape(title)}</title>
    <style>
{css}
    </style>
</head>
<body>
    {body}
</body>
</html>'''


def render_header(branding: dict, work_order_no: str) -> str:
    """Organization header with optional logo and the work order number."""
    logo_url = get_logo_data_url(branding)
    logo_html = f'<img src="{logo_url}" class="logo" alt="Logo">' if logo_url else ''

    org = html_escape(branding.get("organization_name", ""))
    unit = html_escape(branding.get("unit_name", ""))

    return f'''<div class="doc-header">
            <div class="doc-header-brand">
                {logo_html}
                <div>
                    <div class="org-name">{org}</div>
                    <div class="unit-name">{unit}</div>
                </div>
            </div>
            <p class="wo-number">Work Order no- {html_escape(work_order_no)}</p>
        </div>'''
