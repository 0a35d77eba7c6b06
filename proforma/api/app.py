"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proforma.config import settings
from proforma.api.routes import proforma, scenarios

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Pro Forma Engine",
    description="Real estate pro forma: loan sizing, cash flows, disposition and returns",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(proforma.router)
app.include_router(scenarios.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
