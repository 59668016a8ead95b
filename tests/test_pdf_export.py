import pytest
from PIL import Image

from work_order_helpers import validate_work_order
from report_engine import pdf_export
from report_engine.branding_config import get_branding
from report_engine.pdf_export import (
    ExportError, ERROR_MESSAGE, plan_raster_pages, paginate_bitmap, bitmap_to_pdf,
    trim_bitmap, a4_page_height_px, generate_pdf,
)


@pytest.fixture
def work_order(draft):
    return validate_work_order(draft).work_order


@pytest.fixture
def branding(tmp_path):
    return get_branding(logo_path=str(tmp_path / "missing.png"))


def test_page_count_for_two_and_a_half_pages():
    page = 1123.0
    offsets = plan_raster_pages(2.5 * page, page)
    assert len(offsets) == 4
    assert offsets[0] == 0
    assert offsets[1] == pytest.approx(-page)
    assert offsets[2] == pytest.approx(-2 * page)


@pytest.mark.parametrize("height, expected", [
    (0, 2),
    (50, 2),
    (100, 3),
    (250, 4),
])
def test_page_count_is_floor_plus_two(height, expected):
    assert len(plan_raster_pages(height, 100)) == expected


def test_page_height_must_be_positive():
    with pytest.raises(ValueError):
        plan_raster_pages(100, 0)


def test_a4_page_height():
    assert a4_page_height_px(800) == 1131


def test_paginate_bitmap_shifts_each_page():
    bitmap = Image.new("RGB", (10, 250), "white")
    bitmap.paste((255, 0, 0), (0, 100, 10, 200))

    pages = paginate_bitmap(bitmap, page_height_px=100)
    assert len(pages) == 4
    assert all(p.size == (10, 100) for p in pages)
    assert pages[0].getpixel((5, 50)) == (255, 255, 255)
    assert pages[1].getpixel((5, 50)) == (255, 0, 0)
    assert pages[3].getpixel((5, 50)) == (255, 255, 255)


def test_bitmap_to_pdf_writes_pdf():
    bitmap = Image.new("RGB", (80, 300), "white")
    pdf = bitmap_to_pdf(bitmap)
    assert pdf.startswith(b"%PDF")


def test_trim_bitmap_drops_blank_canvas():
    bitmap = Image.new("RGB", (20, 500), "white")
    bitmap.paste((0, 0, 0), (0, 0, 20, 50))
    assert trim_bitmap(bitmap, padding=40).size == (20, 90)


def test_generate_pdf_vector(monkeypatch, work_order, branding):
    captured = {}

    def fake_vector(html):
        captured["html"] = html
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(pdf_export, "render_pdf_vector", fake_vector)
    pdf, filename = generate_pdf(work_order, branding, "vector")
    assert pdf == b"%PDF-1.7 fake"
    assert filename == "ONGC_WorkOrder_WO-100_05032025.pdf"
    assert "size: A4 portrait" in captured["html"]


def test_generate_pdf_raster_uses_tall_canvas(monkeypatch, work_order, branding):
    captured = {}

    def fake_raster(html):
        captured["html"] = html
        return b"%PDF raster"

    monkeypatch.setattr(pdf_export, "render_pdf_raster", fake_raster)
    pdf, _ = generate_pdf(work_order, branding, "raster")
    assert pdf == b"%PDF raster"
    assert "px 12000px; margin: 0;" in captured["html"]


def test_generate_pdf_wraps_failures(monkeypatch, work_order, branding):
    def broken(html):
        raise RuntimeError("renderer crashed")

    monkeypatch.setattr(pdf_export, "render_pdf_vector", broken)
    with pytest.raises(ExportError) as exc:
        generate_pdf(work_order, branding, "vector")
    assert str(exc.value) == ERROR_MESSAGE
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_generate_pdf_unknown_mode(work_order, branding):
    with pytest.raises(ValueError):
        generate_pdf(work_order, branding, "bitmap")
