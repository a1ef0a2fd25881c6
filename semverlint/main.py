"""
semverlint FastAPI Application — Reporting surface over the lint catalog.

  GET  /health             → {"status": "ok", ...}
  GET  /lints              → catalog summaries
  GET  /lints/{lint_id}    → one lint definition
  POST /overrides/resolve  → effective settings for stacked override layers
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI

from semverlint.api.routes.health import router as health_router
from semverlint.api.routes.lints import router as lints_router
from semverlint.api.routes.overrides import router as overrides_router
from semverlint.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("semverlint")

app = FastAPI(
    title="semverlint",
    description="Semver compatibility lints: catalog, overrides and verdicts",
    version="0.1.0",
)

app.include_router(health_router)
app.include_router(lints_router)
app.include_router(overrides_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("semverlint.main:app", host=settings.host, port=settings.port)
