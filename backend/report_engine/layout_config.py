"""
Document Layout Configuration

The work order document is a fixed sequence of blocks. Each block has an id
(looked up in renderers.DOCUMENT_RENDERERS), a section and an order.
Blocks flagged keepTogether get page-break-inside: avoid when printed.

Sections:
- work_order: header through the installation in-charge signature
- certificate: completion certificate and the two sign-off blocks
"""

from typing import List, Optional

# =============================================================================
# LAYOUT
# =============================================================================

DEFAULT_DOCUMENT_LAYOUT = {
    "version": 1,

    "blocks": [
        # Work order
        {"id": "header", "name": "Header", "section": "work_order", "order": 1},
        {"id": "title", "name": "Title", "section": "work_order", "order": 2},
        {"id": "installation_date", "name": "Installation / Date", "section": "work_order", "order": 3},
        {"id": "work_order_banner", "name": "(WORK ORDER)", "section": "work_order", "order": 4},
        {"id": "work_order_details", "name": "Work Details", "section": "work_order", "order": 5},
        {"id": "materials_heading", "name": "Materials Heading", "section": "work_order", "order": 6},
        {"id": "materials_table", "name": "Materials", "section": "work_order", "order": 7, "keepTogether": True},
        {"id": "installation_signature", "name": "Signature of instt I/C", "section": "work_order", "order": 8, "keepTogether": True},

        # Completion certificate
        {"id": "certificate_title", "name": "Completion Certificate", "section": "certificate", "order": 1},
        {"id": "certificate_details", "name": "Certificate Details", "section": "certificate", "order": 2},
        {"id": "signatures", "name": "Signatures", "section": "certificate", "order": 3, "keepTogether": True},
    ]
}

SECTION_ORDER = ["work_order", "certificate"]


# =============================================================================
# LAYOUT HELPERS
# =============================================================================

def get_document_blocks(section: str, layout: Optional[dict] = None) -> List[dict]:
    """Enabled blocks of one section, in render order."""
    layout = layout or DEFAULT_DOCUMENT_LAYOUT
    blocks = [
        b for b in layout.get("blocks", [])
        if b.get("section") == section and b.get("enabled", True)
    ]
    blocks.sort(key=lambda b: b.get("order", 99))
    return blocks
