"""
Lookups router - suggestion lists for the work order form

Installations, agencies, catalog materials, units and job types. These are
suggestions only; the form accepts free text in every field.
"""

from fastapi import APIRouter, HTTPException
from typing import Optional

from reference_data import LOOKUPS, suggest

router = APIRouter()


@router.get("")
async def list_lookups():
    """Names of the available suggestion lists."""
    return {"lookups": list(LOOKUPS.keys())}


@router.get("/{name}")
async def get_lookup(name: str, q: Optional[str] = None, limit: Optional[int] = None):
    """
    Suggestion values for one list, filtered by case-insensitive substring.

    Example: /api/lookups/installations?q=san
    """
    values = LOOKUPS.get(name)
    if values is None:
        raise HTTPException(status_code=404, detail=f"Unknown lookup list: {name}")
    if limit is not None and limit < 1:
        raise HTTPException(status_code=400, detail="limit must be at least 1")
    return {"name": name, "values": suggest(values, q, limit)}
