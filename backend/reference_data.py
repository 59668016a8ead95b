"""
Reference lists for form autocomplete.

Suggestions only: a value that isn't listed here is still accepted.
"""

from typing import List, Optional

from schemas_work_orders import UNIT_CHOICES, JOB_TYPE_CHOICES

INSTALLATIONS = [
    "Santhal Main",
    "Santhal CTF",
    "Santhal GGS-I",
    "Santhal GGS-II",
    "Balol GGS",
    "Lanwa GGS",
    "Bechraji GGS",
    "Jotana GGS",
    "Linch GGS",
    "Nandasan GGS",
    "North Kadi GGS-I",
    "North Kadi GGS-II",
    "Sobhasan GGS",
    "Mehsana CTF",
    "Jakasna EPS",
    "Langhnaj GGS",
]

AGENCIES = [
    "NAVBHARAT CONSTRUCTION",
    "SHREE GANESH ENTERPRISE",
    "JAY AMBE CONSTRUCTION",
    "MAHADEV ENGINEERING WORKS",
    "PATEL PIPELINE SERVICES",
    "UMIYA INFRASTRUCTURE",
]

CATALOG_MATERIALS = [
    "2'' 3LPE PIPE",
    "3'' 3LPE PIPE",
    "4'' 3LPE PIPE",
    "6'' 3LPE PIPE",
    "2'' MS PIPE",
    "3'' MS PIPE",
    "4'' MS PIPE",
    "2'' LEAK CLAMP",
    "3'' LEAK CLAMP",
    "4'' LEAK CLAMP",
    "3'' WELD NECK FLANGE",
    "3'' 90 DEG ELBOW",
    "WELDING ROD",
    "COAL TAR TAPE",
    "PRIMER",
    "CEMENT",
    "SAND",
    "JCB",
    "HYDRA CRANE",
    "TRACTOR WITH TROLLEY",
]

LOOKUPS = {
    "installations": INSTALLATIONS,
    "agencies": AGENCIES,
    "materials": CATALOG_MATERIALS,
    "units": UNIT_CHOICES,
    "job-types": JOB_TYPE_CHOICES,
}


def suggest(values: List[str], query: Optional[str] = None, limit: Optional[int] = None) -> List[str]:
    """Case-insensitive substring filter, keeping list order."""
    q = (query or "").strip().lower()
    matches = [v for v in values if q in v.lower()] if q else list(values)
    if limit is not None:
        matches = matches[:limit]
    return matches
