from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdf_rg.core.config import settings
from pdf_rg.core.logging_config import configure_logging
from pdf_rg.database.init_db import init_db

configure_logging()
logger = logging.getLogger("pdf_rg")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db()
        logger.info("Tabelas verificadas (%s)", settings.DATABASE_URL.split("://", 1)[0])
    yield


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
app = FastAPI(title="PDF RG API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "X-Total",
        "X-Total-Count",
        "X-Total-Pages",
        "X-Page-Size",
        "X-Offset",
    ],
)

# -----------------------------------------------------------------------------
# Routers
# -----------------------------------------------------------------------------
from pdf_rg.api.v1.routes import health, notificacoes, pdf_rg  # noqa: E402
from pdf_rg.api.v1.routes import wallet as wallet_routes  # noqa: E402

app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(pdf_rg.router, prefix="/api/v1", tags=["pdf-rg"])
app.include_router(wallet_routes.router, prefix="/api/v1", tags=["wallet"])
app.include_router(notificacoes.router, prefix="/api/v1", tags=["notificacoes"])
