"""
Work Order Pydantic Schemas

A work order only lives for one form session. WorkOrderDraft is whatever the
form currently holds; WorkOrder is the aggregate after validation, with
defaults applied and blank optional fields normalised to None.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict


NOT_APPLICABLE = "N/A"

UNIT_CHOICES = ["NOS", "MTR", "HRS", "SET", "BAGS", "MTR CUBE"]
JOB_TYPE_CHOICES = ["U/G JOB", "O/H JOB", "MAINTENANCE"]

DEFAULT_INSTALLATION = "Santhal Main"
DEFAULT_AGENCY = "NAVBHARAT CONSTRUCTION"
DEFAULT_LAND_OWNER = "COMPLETED"
DEFAULT_JOB_TYPE = "U/G JOB"
DEFAULT_JOB_TAKEN_TIME = "10:00"
DEFAULT_JOB_COMPLETED_TIME = "18:00"


# =============================================================================
# MATERIALS
# =============================================================================

class MaterialLine(BaseModel):
    """One row of contractor-supplied material"""
    description: str = ""
    quantity: str = ""              # "28.800" - text, never parsed
    unit: str = ""                  # UNIT_CHOICES or free text


# =============================================================================
# FORM STATE
# =============================================================================

class WorkOrderDraft(BaseModel):
    """Raw form values, nothing checked yet"""
    work_order_no: Optional[str] = None
    installation_name: Optional[str] = None
    date: Optional[str] = None                  # YYYY-MM-DD from <input type="date">
    work_description: Optional[str] = None
    work_details: Optional[str] = None
    land_owner: Optional[str] = None
    leakage_report_no: Optional[str] = None
    materials: List[MaterialLine] = Field(default_factory=lambda: [MaterialLine()])
    agency_name: Optional[str] = None
    job_taken_time: Optional[str] = None        # HH:MM
    job_completed_time: Optional[str] = None
    job_type: Optional[str] = None
    clamping: Optional[str] = None
    length_pipe_changed: Optional[str] = None
    line_retrieved: Optional[str] = None


class WorkOrder(BaseModel):
    """Validated work order handed to the preview and export paths"""
    work_order_no: str
    installation_name: str
    date: str
    work_description: str
    work_details: str
    land_owner: str = DEFAULT_LAND_OWNER
    leakage_report_no: Optional[str] = None
    materials: List[MaterialLine]
    agency_name: str
    job_taken_time: str
    job_completed_time: str
    job_type: str = DEFAULT_JOB_TYPE
    clamping: Optional[str] = None
    length_pipe_changed: Optional[str] = None
    line_retrieved: Optional[str] = None


# =============================================================================
# VALIDATION RESULT
# =============================================================================

class FieldError(BaseModel):
    field: str                      # "work_order_no", "materials.0.unit"
    message: str


class ValidationResult(BaseModel):
    work_order: Optional[WorkOrder] = None
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.work_order is not None and not self.errors

    def errors_by_field(self) -> Dict[str, str]:
        """First message per field, for inline display."""
        result = {}
        for err in self.errors:
            result.setdefault(err.field, err.message)
        return result
