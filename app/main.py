# main.py
"""
Point d'entrée de l'API d'évaluation psychologique.
Enregistre les modules via leurs routers.

Architecture : modules verticaux + engine transversal (pur, sans DB).
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.content.traits import UnknownTraitError
from app.modules.assessment.router import router as assessment_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assessment_router)


@app.exception_handler(UnknownTraitError)
async def trait_catalogue_drift_handler(request: Request, exc: UnknownTraitError):
    # Questions et tables de traits désynchronisées : à corriger côté catalogue
    logger.critical("Dérive du catalogue de traits sur %s : %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "TRAIT_CATALOGUE_DRIFT",
                "message": str(exc),
                "details": {"framework": exc.framework, "trait": exc.trait},
            }
        },
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": "1.0.0"}
