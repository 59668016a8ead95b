"""
Report Engine Package

Renders the work order / completion certificate document and exports it.

Components:
- branding_config: Default branding, themes and logo loading
- layout_config: Fixed block sequence of the document
- templates: CSS generation using branding
- renderers: Block rendering functions (r_* functions)
- pdf_export: Vector and raster PDF output
- text_export: Fixed-width plain-text (.doc) output
"""

from .branding_config import DEFAULT_BRANDING, THEMES, get_branding
from .layout_config import DEFAULT_DOCUMENT_LAYOUT, get_document_blocks
from .templates import generate_css, generate_base_html
from .renderers import (
    DOCUMENT_RENDERERS, format_date, format_time, display_optional,
    document_filename, render_document, render_document_html,
)
from .pdf_export import ExportError, generate_pdf, plan_raster_pages
from .text_export import DOC_MIME_TYPE, render_text_document

__all__ = [
    'DEFAULT_BRANDING',
    'THEMES',
    'DEFAULT_DOCUMENT_LAYOUT',
    'get_branding',
    'get_document_blocks',
    'generate_css',
    'generate_base_html',
    'DOCUMENT_RENDERERS',
    'format_date',
    'format_time',
    'display_optional',
    'document_filename',
    'render_document',
    'render_document_html',
    'ExportError',
    'generate_pdf',
    'plan_raster_pages',
    'DOC_MIME_TYPE',
    'render_text_document',
]
