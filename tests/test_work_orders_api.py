import json

import pytest
from fastapi.testclient import TestClient

import main
from routers import work_orders
from report_engine.pdf_export import ExportError, ERROR_MESSAGE

client = TestClient(main.app)


def _payload(form_data):
    """Hidden preview-page fields for the validated work order."""
    draft = {k: v for k, v in form_data.items() if not k.startswith("materials-") and k != "session_id"}
    draft["materials"] = [{"description": "3'' PIPE", "quantity": "10", "unit": "MTR"}]
    return {"payload": json.dumps(draft), "session_id": form_data["session_id"]}


def test_health():
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_form_page_has_defaults():
    res = client.get("/")
    assert res.status_code == 200
    assert 'value="Santhal Main"' in res.text
    assert 'value="NAVBHARAT CONSTRUCTION"' in res.text
    assert 'name="materials-0-description"' in res.text
    assert 'value="remove_material:0"' not in res.text


def test_add_and_remove_material_rows(form_data):
    form_data["action"] = "add_material"
    res = client.post("/work-orders/form", data=form_data)
    assert res.status_code == 200
    assert 'name="materials-1-description"' in res.text
    assert 'value="remove_material:1"' in res.text

    form_data.update({
        "action": "remove_material:0",
        "materials-1-description": "CLAMP",
        "materials-1-quantity": "2",
        "materials-1-unit": "NOS",
    })
    res = client.post("/work-orders/form", data=form_data)
    assert res.status_code == 200
    assert 'name="materials-1-description"' not in res.text
    assert 'value="CLAMP"' in res.text


def test_invalid_form_is_returned_with_errors(form_data):
    form_data["work_order_no"] = ""
    form_data["materials-0-unit"] = ""
    form_data["action"] = "preview"
    res = client.post("/work-orders/form", data=form_data)
    assert res.status_code == 422
    assert "Work Order No. is required" in res.text
    assert "Unit is required" in res.text
    assert "DATE: 05-03-2025" not in res.text


def test_valid_form_shows_preview(form_data):
    form_data["action"] = "preview"
    res = client.post("/work-orders/form", data=form_data)
    assert res.status_code == 200
    assert "DATE: 05-03-2025" in res.text
    assert '<td class="col-description">3\'\' PIPE</td>' in res.text
    assert "Download PDF" in res.text
    assert 'name="payload"' in res.text


def test_back_to_edit_keeps_values(form_data):
    res = client.post("/work-orders/edit", data=_payload(form_data))
    assert res.status_code == 200
    assert 'value="WO-100"' in res.text
    assert 'value="3&#x27;&#x27; PIPE"' in res.text


def test_edit_with_bad_payload(form_data):
    res = client.post("/work-orders/edit", data={"payload": "{not json", "session_id": "x"})
    assert res.status_code == 400


def test_doc_export(form_data):
    res = client.post("/work-orders/export/doc", data=_payload(form_data))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/msword")
    assert res.headers["content-disposition"] == 'attachment; filename="ONGC_WorkOrder_WO-100_05032025.doc"'
    assert "3'' PIPE" + " " * 42 + "10       MTR" in res.text


def test_pdf_export(monkeypatch, form_data):
    calls = []

    def fake_generate_pdf(work_order, branding, mode=None):
        calls.append(mode)
        return b"%PDF-1.7", "ONGC_WorkOrder_WO-100_05032025.pdf"

    monkeypatch.setattr(work_orders, "generate_pdf", fake_generate_pdf)
    res = client.post("/work-orders/export/pdf?mode=raster", data=_payload(form_data))
    assert res.status_code == 200
    assert res.content == b"%PDF-1.7"
    assert res.headers["content-type"] == "application/pdf"
    assert 'filename="ONGC_WorkOrder_WO-100_05032025.pdf"' in res.headers["content-disposition"]
    assert calls == ["raster"]
    assert not work_orders.export_guard.is_busy(form_data["session_id"])


def test_pdf_export_failure_reports_message(monkeypatch, form_data):
    def failing_generate_pdf(work_order, branding, mode=None):
        raise ExportError(ERROR_MESSAGE)

    monkeypatch.setattr(work_orders, "generate_pdf", failing_generate_pdf)
    res = client.post("/work-orders/export/pdf", data=_payload(form_data))
    assert res.status_code == 500
    assert res.json()["detail"] == "Error generating PDF. Please try again."
    assert not work_orders.export_guard.is_busy(form_data["session_id"])


def test_pdf_export_rejects_unknown_mode(form_data):
    res = client.post("/work-orders/export/pdf?mode=bitmap", data=_payload(form_data))
    assert res.status_code == 422


def test_export_in_progress_is_refused(form_data):
    key = form_data["session_id"]
    assert work_orders.export_guard.acquire(key)
    try:
        res = client.post("/work-orders/export/doc", data=_payload(form_data))
        assert res.status_code == 409
    finally:
        work_orders.export_guard.release(key)


def test_export_of_incomplete_payload_is_rejected(form_data):
    data = _payload(form_data)
    draft = json.loads(data["payload"])
    draft["agency_name"] = ""
    data["payload"] = json.dumps(draft)
    res = client.post("/work-orders/export/doc", data=data)
    assert res.status_code == 422
    assert res.json()["detail"]["errors"] == [
        {"field": "agency_name", "message": "Agency Name is required"}
    ]


# JSON API

def test_api_defaults():
    res = client.get("/api/work-orders/defaults")
    body = res.json()
    assert body["installation_name"] == "Santhal Main"
    assert body["land_owner"] == "COMPLETED"
    assert len(body["materials"]) == 1


def test_api_validate(draft):
    res = client.post("/api/work-orders/validate", json=draft.model_dump())
    body = res.json()
    assert body["ok"] is True
    assert body["work_order"]["work_order_no"] == "WO-100"

    res = client.post("/api/work-orders/validate", json={"materials": []})
    body = res.json()
    assert body["ok"] is False
    assert body["work_order"] is None
    assert {"field": "materials", "message": "At least one material item is required"} in body["errors"]


def test_api_preview(draft):
    res = client.post("/api/work-orders/preview", params={"theme": "modern"}, json=draft.model_dump())
    assert res.status_code == 200
    assert "DATE: 05-03-2025" in res.text
    assert "Times New Roman" not in res.text


def test_api_pdf(monkeypatch, draft):
    monkeypatch.setattr(work_orders, "generate_pdf", lambda wo, branding, mode=None: (b"%PDF", "x.pdf"))
    res = client.post("/api/work-orders/pdf", json=draft.model_dump())
    assert res.status_code == 200
    assert res.content == b"%PDF"


def test_api_doc(draft):
    res = client.post("/api/work-orders/doc", json=draft.model_dump())
    assert res.status_code == 200
    assert "COMPLETION CERTIFICATE" in res.text
