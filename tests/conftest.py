import sys
from pathlib import Path

import pytest

BACKEND = Path(__file__).resolve().parents[1] / "backend"
sys.path.append(str(BACKEND))

from schemas_work_orders import WorkOrderDraft, MaterialLine  # noqa: E402


@pytest.fixture
def draft():
    """A complete draft for work order WO-100 dated 2025-03-05."""
    return WorkOrderDraft(
        work_order_no="WO-100",
        installation_name="Santhal Main",
        date="2025-03-05",
        work_description="SN#15 WATER INJECTION HEADER MODIFICATION",
        work_details="Leak on 3'' line near well 12",
        land_owner="COMPLETED",
        agency_name="NAVBHARAT CONSTRUCTION",
        job_taken_time="10:00",
        job_completed_time="18:00",
        job_type="U/G JOB",
        materials=[MaterialLine(description="3'' PIPE", quantity="10", unit="MTR")],
    )


@pytest.fixture
def form_data():
    """Flat form fields as posted by the work order page."""
    return {
        "session_id": "sess-1",
        "work_order_no": "WO-100",
        "installation_name": "Santhal Main",
        "date": "2025-03-05",
        "work_description": "SN#15 WATER INJECTION HEADER MODIFICATION",
        "work_details": "Leak on 3'' line near well 12",
        "land_owner": "COMPLETED",
        "agency_name": "NAVBHARAT CONSTRUCTION",
        "job_taken_time": "10:00",
        "job_completed_time": "18:00",
        "job_type": "U/G JOB",
        "materials-0-description": "3'' PIPE",
        "materials-0-quantity": "10",
        "materials-0-unit": "MTR",
    }
