"""
Digital Work Order Generator
ONGC Mehasana Asset - leakage repair work orders and completion certificates
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

import app_config
from routers import work_orders, lookups, branding

logging.basicConfig(
    level=app_config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Work Order generator starting up (pdf mode: {app_config.PDF_RENDER_MODE}, theme: {app_config.DOCUMENT_THEME})")
    yield
    # Shutdown
    logger.info("Work Order generator shutting down...")

app = FastAPI(
    title="Work Order API",
    description="Work order and completion certificate generator for ONGC Mehasana Asset",
    version=APP_VERSION,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(work_orders.router, tags=["Pages"])
app.include_router(work_orders.api_router, prefix="/api/work-orders", tags=["Work Orders"])
app.include_router(lookups.router, prefix="/api/lookups", tags=["Lookups"])
app.include_router(branding.router, prefix="/api/branding", tags=["Branding"])


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "Work Order API", "version": APP_VERSION}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app_config.HOST, port=app_config.PORT)
