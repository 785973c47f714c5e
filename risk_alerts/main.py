"""
FastAPI application entrypoint.

Run locally:  uvicorn risk_alerts.main:app --reload
"""

import logging

from fastapi import FastAPI

from risk_alerts.api.routes import router
from risk_alerts.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(levelname)s | %(name)s | %(message)s",
)

app = FastAPI(
    title="Patient Risk Alerts API",
    description=(
        "Scores patient vitals (blood pressure, temperature, age), flags data "
        "quality issues, and groups patients into high-risk, fever and "
        "data-quality alert lists."
    ),
    version="1.0.0",
)

app.include_router(router, prefix="/api/v1")
