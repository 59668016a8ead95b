"""
Branding Router - document branding (read-only)

Branding is fixed by configuration: organization names, theme and the logo
file at WORKORDER_LOGO_PATH.
"""

from fastapi import APIRouter
from typing import Optional

from report_engine.branding_config import THEMES, get_branding

router = APIRouter()


@router.get("")
async def get_branding_config(theme: Optional[str] = None):
    branding = get_branding(theme)
    result = dict(branding)
    result.pop('logo_data', None)
    result['available_themes'] = list(THEMES.keys())
    return result


@router.get("/logo")
async def get_branding_logo():
    branding = get_branding()
    if not branding.get('logo_data'):
        return {"has_logo": False, "data": None, "mime_type": None}
    return {
        "has_logo": True,
        "data": branding['logo_data'],
        "mime_type": branding.get('logo_mime_type', 'image/png'),
    }
