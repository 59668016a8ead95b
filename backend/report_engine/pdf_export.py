"""
PDF Export for Work Orders

Two render modes:
- vector: WeasyPrint lays the document HTML out directly on A4 pages.
- raster: the document is drawn once at screen width into a single tall
  bitmap, and that bitmap is stepped across A4 page frames.

Either way a failure is logged and raised as ExportError; no partial file is
returned.
"""

from typing import List, Tuple, Optional
import io
import logging

from PIL import Image, ImageOps

import app_config
from schemas_work_orders import WorkOrder
from .renderers import render_document_html, document_filename

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
RENDER_MODES = ("vector", "raster")

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
A4_WIDTH_PT = 595.28

# One offscreen page tall enough for any realistic materials list
RASTER_CANVAS_HEIGHT_PX = 12000
RASTER_BOTTOM_PADDING_PX = 40

ERROR_MESSAGE = "Error generating PDF. Please try again."


class ExportError(Exception):
    """The PDF could not be produced."""


# =============================================================================
# PAGINATION
# =============================================================================

def plan_raster_pages(image_height: float, page_height: float) -> List[float]:
    """
    Vertical offsets at which the full bitmap is placed on each page.

    The first page shows the top of the bitmap. Then, while the remaining
    height is still >= 0, one page height is taken off and another page is
    added with the bitmap shifted up by the height consumed so far. The loop
    always ends with a blank trailing page: floor(H / P) + 2 pages in total.
    """
    if page_height <= 0:
        raise ValueError("page_height must be positive")

    offsets = [0.0]
    remaining = image_height
    while remaining >= 0:
        remaining -= page_height
        offsets.append(remaining - image_height)
    return offsets


def a4_page_height_px(width_px: int) -> int:
    return round(width_px * A4_HEIGHT_MM / A4_WIDTH_MM)


def paginate_bitmap(bitmap: Image.Image, page_height_px: Optional[int] = None) -> List[Image.Image]:
    """Cut the bitmap into A4-proportioned page images using plan_raster_pages."""
    width = bitmap.width
    page_height_px = page_height_px or a4_page_height_px(width)

    pages = []
    for offset in plan_raster_pages(bitmap.height, page_height_px):
        page = Image.new("RGB", (width, page_height_px), "white")
        page.paste(bitmap, (0, int(round(offset))))
        pages.append(page)
    return pages


def bitmap_to_pdf(bitmap: Image.Image, page_height_px: Optional[int] = None) -> bytes:
    """Paginate the bitmap and write the pages as an A4 portrait PDF."""
    pages = paginate_bitmap(bitmap.convert("RGB"), page_height_px)

    # Pixels per inch that make the bitmap width exactly one A4 width
    resolution = bitmap.width * 72 / A4_WIDTH_PT

    buffer = io.BytesIO()
    pages[0].save(buffer, "PDF", save_all=True, append_images=pages[1:], resolution=resolution)
    return buffer.getvalue()


# =============================================================================
# RENDERING
# =============================================================================

def raster_page_rule(width_px: int) -> str:
    return f"@page {{ size: {width_px}px {RASTER_CANVAS_HEIGHT_PX}px; margin: 0; }}"


def trim_bitmap(bitmap: Image.Image, padding: int = RASTER_BOTTOM_PADDING_PX) -> Image.Image:
    """Drop the empty canvas below the last non-white row."""
    bbox = ImageOps.invert(bitmap.convert("L")).getbbox()
    if not bbox:
        return bitmap.crop((0, 0, bitmap.width, min(bitmap.height, padding)))
    bottom = min(bitmap.height, bbox[3] + padding)
    return bitmap.crop((0, 0, bitmap.width, bottom))


def rasterize_html(html: str, scale: float) -> Image.Image:
    """Render HTML offscreen and capture it as one tall RGB bitmap."""
    from weasyprint import HTML
    import fitz

    pdf_bytes = HTML(string=html).write_pdf()

    # CSS px are 1/96 in, PDF points 1/72 in
    zoom = scale * 96 / 72
    strips = []
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        for page in doc:
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
            strips.append(Image.frombytes("RGB", [pix.width, pix.height], pix.samples))
    finally:
        doc.close()

    if not strips:
        raise ExportError("Rendered document has no pages")

    width = max(s.width for s in strips)
    bitmap = Image.new("RGB", (width, sum(s.height for s in strips)), "white")
    y = 0
    for strip in strips:
        bitmap.paste(strip, (0, y))
        y += strip.height
    return trim_bitmap(bitmap, padding=int(RASTER_BOTTOM_PADDING_PX * scale))


def render_pdf_vector(html: str) -> bytes:
    from weasyprint import HTML

    buffer = io.BytesIO()
    HTML(string=html).write_pdf(buffer)
    return buffer.getvalue()


def render_pdf_raster(html: str, scale: float = app_config.RASTER_SCALE) -> bytes:
    bitmap = rasterize_html(html, scale)
    logger.debug(f"Raster bitmap {bitmap.width}x{bitmap.height}px")
    return bitmap_to_pdf(bitmap)


def generate_pdf(work_order: WorkOrder, branding: dict, mode: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Build the PDF for a validated work order.

    Args:
        work_order: validated aggregate
        branding: from get_branding()
        mode: "vector" or "raster"; defaults to app_config.PDF_RENDER_MODE

    Returns:
        (pdf bytes, download filename)

    Raises:
        ExportError: rendering, rasterization or PDF writing failed
    """
    mode = mode or app_config.PDF_RENDER_MODE
    if mode not in RENDER_MODES:
        raise ValueError(f"Unknown PDF render mode: {mode}")

    filename = document_filename(work_order, branding, "pdf")

    try:
        if mode == "raster":
            width = app_config.RASTER_WIDTH_PX
            html = render_document_html(work_order, branding, page_rule=raster_page_rule(width))
            pdf = render_pdf_raster(html)
        else:
            html = render_document_html(work_order, branding)
            pdf = render_pdf_vector(html)
    except Exception as e:
        logger.exception(f"Error generating PDF for work order {work_order.work_order_no} ({mode})")
        raise ExportError(ERROR_MESSAGE) from e

    logger.info(f"Generated {mode} PDF {filename} ({len(pdf)} bytes)")
    return pdf, filename
