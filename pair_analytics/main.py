from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pair_analytics.api.routers.pairs import router as pairs_router
from pair_analytics.api.routers.transactions import router as transactions_router
from pair_analytics.shared.config import get_settings

logging.basicConfig(level=get_settings().log_level.upper())

app = FastAPI(title="Pair Analytics API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(pairs_router)
app.include_router(transactions_router)
