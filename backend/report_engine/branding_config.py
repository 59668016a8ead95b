"""
Branding Configuration for Work Order Documents

Defines default branding, the document themes, and the best-effort logo
loader. The three historical layouts of the certificate differ only in
styling, so they are expressed here as THEMES over a single template.
"""

from typing import Optional
from pathlib import Path
import base64
import io
import logging

from PIL import Image

import app_config

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULT BRANDING
# =============================================================================

DEFAULT_BRANDING = {
    "version": 1,

    # Identity
    "organization_name": "OIL AND NATURAL GAS CORPORATION",
    "unit_name": "OPERATION GROUP MEHASANA ASSET",
    "document_title": "WORK ORDER AND COMPLETION CERTIFICATION",
    "document_subtitle": "(Leakage Repairs)",
    "file_prefix": app_config.FILE_PREFIX,

    # Logo
    "logo_data": None,
    "logo_mime_type": "image/png",
    "logo_size": "medium",        # small (40px), medium (64px), large (80px)

    # Theme (see THEMES)
    "theme": "classic",

    # Page
    "page_size": "A4",
    "page_margin": "12mm",
}

# Theme values feed the CSS generator; every key is required in each theme
THEMES = {
    # Serif, heavy rules - the layout used for the signed paper copy
    "classic": {
        "font_family": "'Times New Roman', Times, serif",
        "body_font_size": "14px",
        "heading_font_size": "20px",
        "section_font_size": "18px",
        "text_color": "#000000",
        "muted_color": "#333333",
        "rule_color": "#000000",
        "rule_width": "2px",
        "table_header_background": "transparent",
        "cell_padding": "12px",
        "line_height": "1.6",
    },
    # Sans, light rules and a shaded table header
    "modern": {
        "font_family": "Arial, Helvetica, sans-serif",
        "body_font_size": "13px",
        "heading_font_size": "19px",
        "section_font_size": "16px",
        "text_color": "#1a1a1a",
        "muted_color": "#555555",
        "rule_color": "#1f2937",
        "rule_width": "1.5px",
        "table_header_background": "#e5e7eb",
        "cell_padding": "10px",
        "line_height": "1.5",
    },
    # Tight spacing so long material lists stay on one page
    "compact": {
        "font_family": "Arial, Helvetica, sans-serif",
        "body_font_size": "11px",
        "heading_font_size": "16px",
        "section_font_size": "14px",
        "text_color": "#000000",
        "muted_color": "#444444",
        "rule_color": "#000000",
        "rule_width": "1px",
        "table_header_background": "transparent",
        "cell_padding": "5px",
        "line_height": "1.3",
    },
}

LOGO_SIZES = {
    "small": "40px",
    "medium": "64px",
    "large": "80px",
}


# =============================================================================
# BRANDING LOADER
# =============================================================================

def get_branding(theme: Optional[str] = None, logo_path: Optional[str] = None) -> dict:
    """
    Build the branding config for one render.

    Args:
        theme: THEMES key; unknown names fall back to the configured theme
        logo_path: logo file to embed; defaults to app_config.LOGO_PATH

    Returns:
        Complete branding dict, theme values merged in
    """
    branding = dict(DEFAULT_BRANDING)

    theme_name = theme or app_config.DOCUMENT_THEME
    if theme_name not in THEMES:
        logger.warning(f"Unknown document theme '{theme_name}', using classic")
        theme_name = "classic"
    branding["theme"] = theme_name
    branding.update(THEMES[theme_name])

    logo = load_logo(logo_path or app_config.LOGO_PATH)
    if logo:
        branding["logo_data"], branding["logo_mime_type"] = logo

    return branding


def load_logo(path: str) -> Optional[tuple]:
    """
    Read and decode the logo image.

    Best effort: a missing, unreadable or undecodable file is logged and
    None is returned so rendering carries on without the image.

    Returns:
        (base64 data, mime type) or None
    """
    try:
        raw = Path(path).read_bytes()
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
            fmt = (img.format or "PNG").lower()
    except Exception as e:
        logger.warning(f"Could not load logo from {path}, proceeding without it: {e}")
        return None
    return base64.b64encode(raw).decode("ascii"), f"image/{fmt}"


def get_logo_data_url(branding: dict) -> Optional[str]:
    """Logo as data URL for embedding in HTML, or None if no logo."""
    if not branding.get("logo_data"):
        return None
    mime = branding.get("logo_mime_type", "image/png")
    return f"data:{mime};base64,{branding['logo_data']}"


def get_logo_size_px(branding: dict) -> str:
    size_key = branding.get("logo_size", "medium")
    return LOGO_SIZES.get(size_key, LOGO_SIZES["medium"])
