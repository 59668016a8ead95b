"""
Work Order Helper Functions

Contains:
- New form defaults
- Material row append/remove
- Validation (returns field-keyed errors, never raises for missing data)
- Flat HTML form decoding
- Export in-flight guard
"""

from typing import Optional, List, Mapping, Tuple
from datetime import date as date_cls
import threading
import logging
import re

from schemas_work_orders import (
    MaterialLine, WorkOrderDraft, WorkOrder, FieldError, ValidationResult,
    DEFAULT_INSTALLATION, DEFAULT_AGENCY, DEFAULT_LAND_OWNER, DEFAULT_JOB_TYPE,
    DEFAULT_JOB_TAKEN_TIME, DEFAULT_JOB_COMPLETED_TIME,
)

logger = logging.getLogger(__name__)


# Required top-level fields, in form order
REQUIRED_FIELDS = {
    "work_order_no": "Work Order No. is required",
    "installation_name": "Installation Name is required",
    "date": "Date is required",
    "work_description": "Work Description is required",
    "work_details": "Work Details are required",
    "agency_name": "Agency Name is required",
    "job_taken_time": "Job Taken Time is required",
    "job_completed_time": "Job Completed Time is required",
}

MATERIAL_REQUIRED_FIELDS = {
    "description": "Material description is required",
    "quantity": "Quantity is required",
    "unit": "Unit is required",
}

OPTIONAL_FIELDS = ["leakage_report_no", "clamping", "length_pipe_changed", "line_retrieved"]

# Fields that fall back to a default instead of failing
DEFAULTED_FIELDS = {
    "land_owner": DEFAULT_LAND_OWNER,
    "job_type": DEFAULT_JOB_TYPE,
}

MATERIALS_EMPTY_MESSAGE = "At least one material item is required"

_MATERIAL_KEY = re.compile(r"^materials-(\d+)-(description|quantity|unit)$")


# =============================================================================
# FORM STATE
# =============================================================================

def new_draft(today: Optional[date_cls] = None) -> WorkOrderDraft:
    """Fresh form with the usual Mehasana defaults and one blank material row."""
    today = today or date_cls.today()
    return WorkOrderDraft(
        work_order_no="",
        installation_name=DEFAULT_INSTALLATION,
        date=today.isoformat(),
        work_description="",
        work_details="",
        land_owner=DEFAULT_LAND_OWNER,
        agency_name=DEFAULT_AGENCY,
        job_taken_time=DEFAULT_JOB_TAKEN_TIME,
        job_completed_time=DEFAULT_JOB_COMPLETED_TIME,
        job_type=DEFAULT_JOB_TYPE,
        materials=[MaterialLine()],
    )


def append_material(draft: WorkOrderDraft) -> WorkOrderDraft:
    draft.materials.append(MaterialLine())
    return draft


def remove_material(draft: WorkOrderDraft, index: int) -> bool:
    """
    Remove the material row at index.

    The last remaining row can't be removed; returns False (and leaves the
    list alone) in that case or when index is out of range.
    """
    if len(draft.materials) <= 1:
        return False
    if index < 0 or index >= len(draft.materials):
        return False
    del draft.materials[index]
    return True


# =============================================================================
# VALIDATION
# =============================================================================

def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_work_order(draft: WorkOrderDraft) -> ValidationResult:
    """
    Check a draft against the work order rules.

    Returns a ValidationResult carrying either the WorkOrder or the list of
    field errors. Optional fields that are blank become None.
    """
    errors: List[FieldError] = []
    values = {}

    for field, message in REQUIRED_FIELDS.items():
        value = _clean(getattr(draft, field))
        if not value:
            errors.append(FieldError(field=field, message=message))
        values[field] = value

    for field, default in DEFAULTED_FIELDS.items():
        values[field] = _clean(getattr(draft, field)) or default

    for field in OPTIONAL_FIELDS:
        values[field] = _clean(getattr(draft, field)) or None

    materials = []
    if not draft.materials:
        errors.append(FieldError(field="materials", message=MATERIALS_EMPTY_MESSAGE))
    for i, line in enumerate(draft.materials):
        cleaned = {}
        for field, message in MATERIAL_REQUIRED_FIELDS.items():
            value = _clean(getattr(line, field))
            if not value:
                errors.append(FieldError(field=f"materials.{i}.{field}", message=message))
            cleaned[field] = value
        materials.append(MaterialLine(**cleaned))

    if errors:
        logger.debug(f"Work order validation failed: {[e.field for e in errors]}")
        return ValidationResult(errors=errors)

    values["materials"] = materials
    return ValidationResult(work_order=WorkOrder(**values))


# =============================================================================
# HTML FORM DECODING
# =============================================================================

def draft_from_form(form: Mapping[str, str]) -> WorkOrderDraft:
    """
    Build a draft from flat form keys.

    Material rows arrive as materials-<i>-description / -quantity / -unit and
    keep the order of their index, even if indexes have gaps.
    """
    rows = {}
    for key, value in form.items():
        match = _MATERIAL_KEY.match(key)
        if match:
            index, field = int(match.group(1)), match.group(2)
            rows.setdefault(index, {})[field] = value

    fields = {name: form.get(name) for name in WorkOrderDraft.model_fields if name != "materials"}
    materials = [MaterialLine(**rows[i]) for i in sorted(rows)]
    return WorkOrderDraft(**fields, materials=materials)


def parse_form_action(value: Optional[str]) -> Tuple[str, Optional[int]]:
    """
    Decode the pressed submit button.

    "remove_material:2" -> ("remove_material", 2); anything unknown is treated
    as a preview request.
    """
    value = (value or "").strip()
    if value == "add_material":
        return "add_material", None
    if value.startswith("remove_material:"):
        try:
            return "remove_material", int(value.split(":", 1)[1])
        except ValueError:
            return "preview", None
    return "preview", None


# =============================================================================
# EXPORT GUARD
# =============================================================================

class ExportGuard:
    """
    One export at a time per form session.

    A boolean in-flight flag per key, not a queue: a second request while the
    first is running is refused.
    """

    def __init__(self):
        self._in_flight = set()
        self._lock = threading.Lock()

    def acquire(self, key: str) -> bool:
        with self._lock:
            if key in self._in_flight:
                return False
            self._in_flight.add(key)
            return True

    def release(self, key: str) -> None:
        with self._lock:
            self._in_flight.discard(key)

    def is_busy(self, key: str) -> bool:
        with self._lock:
            return key in self._in_flight
