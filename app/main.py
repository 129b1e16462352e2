"""
FastAPI application entry point.

Run:  python -m uvicorn app.main:app --reload --port 8000

Saved tests go to the SQLite file named by ``SNKTEST_STORE_PATH``
(default: an in-memory database, lost on restart).
"""
from __future__ import annotations

import logging
import os

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
)

from fastapi import FastAPI

from services.table_test_service import TableTestService
from infrastructure import SqliteStore
from app.routes import router, init_service

STORE_PATH_ENV = "SNKTEST_STORE_PATH"

app = FastAPI(title="SNKTEST Table Test Builder")

store = SqliteStore(os.environ.get(STORE_PATH_ENV, ":memory:"))
init_service(TableTestService(store))

# API routes
app.include_router(router)
