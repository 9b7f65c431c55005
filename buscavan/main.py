"""
Point d'entrée principal de l'API BuscaVan (voyages en van).
Démarrage : uvicorn buscavan.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import buscavan.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from buscavan.database import dispose_engine
from buscavan.routers import locations, trips

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : libère le pool de connexions à l'arrêt."""
    yield
    dispose_engine()
    logger.info("Pool de connexions fermé.")


app = FastAPI(
    title="BuscaVan API",
    description="API de gestion des voyages en van : trajets, photos et commentaires",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS — autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "X-User-Id"],
)


app.include_router(trips.router)
app.include_router(trips.vehicles_router)
app.include_router(locations.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "BuscaVan API", "version": "0.1.0"}
