# fileshelf_backend/app/main.py
from __future__ import annotations

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .database import init_db
from .routers import auth as auth_router
from .routers import files as files_router
from .routers import health as health_router

logger = logging.getLogger("fileshelf.main")
logger.setLevel(logging.INFO)

app = FastAPI(title="FileShelf API", version="0.1.0")

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- alive probe that does NOT touch the database ---
@app.get("/health/bootcheck")
def bootcheck():
    return {"status": "starting-ok"}

# include routers
app.include_router(auth_router.router)
app.include_router(files_router.router)
app.include_router(health_router.router)

# lifecycle hooks
@app.on_event("startup")
async def on_startup():
    logger.info(">>>> FASTAPI STARTUP BEGIN")
    init_db()
    logger.info(">>>> FASTAPI STARTUP COMPLETE")

@app.on_event("shutdown")
async def on_shutdown():
    logger.info(">>>> FASTAPI SHUTDOWN")
