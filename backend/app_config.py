"""
Application configuration for the Work Order generator.

Single-workstation deployment: everything has a usable default and can be
overridden from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

LOG_LEVEL = os.getenv("WORKORDER_LOG_LEVEL", "INFO")

# Organization logo, embedded into preview and exports when it can be read
LOGO_PATH = os.getenv("WORKORDER_LOGO_PATH", str(BASE_DIR / "static" / "ongc_logo.png"))

# Download names: <prefix>_<workOrderNo>_<DDMMYYYY>.<ext>
FILE_PREFIX = os.getenv("WORKORDER_FILE_PREFIX", "ONGC_WorkOrder")

DOCUMENT_THEME = os.getenv("WORKORDER_THEME", "classic")     # classic, modern, compact

# PDF export
PDF_RENDER_MODE = os.getenv("WORKORDER_PDF_MODE", "vector")  # vector, raster
RASTER_WIDTH_PX = int(os.getenv("WORKORDER_RASTER_WIDTH", "800"))
RASTER_SCALE = float(os.getenv("WORKORDER_RASTER_SCALE", "2"))

# Development server (python main.py)
HOST = os.getenv("WORKORDER_HOST", "127.0.0.1")
PORT = int(os.getenv("WORKORDER_PORT", "8000"))
