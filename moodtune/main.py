#!/usr/bin/env python3
import os
import logging
from dotenv import load_dotenv

# Charger .env avant les modules qui lisent l'environnement à l'import
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .errors import MoodTuneError, UpstreamError
from .routes import spotify
from .services.state import get_state
from .utils.database import create_all


log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=log_level, format="%(asctime)s - %(levelname)s - %(message)s")

app = FastAPI(title="MoodTune API", version=os.getenv("APP_VERSION", "1.0.0"))

# CORS: toute origine par défaut (le frontend appelle depuis son propre domaine)
cors_enabled = os.getenv("ENABLE_CORS", "true").lower() == "true"
allow_origins: list[str] = []
allow_credentials = False
if cors_enabled:
    origins_env = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    # Liste d'origines séparées par des virgules
    allow_origins = [o.strip() for o in origins_env.split(",") if o.strip()] or ["*"]
    allow_credentials = os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"
    # Si wildcard et credentials=true, les navigateurs refusent: forcer credentials à false
    if "*" in allow_origins and allow_credentials:
        logging.warning(
            "CORS: '*' avec credentials=true n'est pas supporté par les navigateurs; credentials sera forcé à false."
        )
        allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

state = get_state()

app.include_router(spotify.router, prefix="/spotify", tags=["spotify"])


@app.exception_handler(MoodTuneError)
async def moodtune_error_handler(request: Request, exc: MoodTuneError):
    if isinstance(exc, UpstreamError):
        logging.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logging.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logging.warning("%s %s: corps invalide", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"error": "Requête invalide"})


def _cors_headers(request: Request) -> dict:
    origin = request.headers.get("origin")
    if not cors_enabled or not origin:
        return {}
    if "*" in allow_origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allow_origins:
        headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
        if allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        return headers
    return {}


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logging.exception("Erreur inattendue sur %s %s", request.method, request.url.path)
    # Servi par ServerErrorMiddleware, hors de CORSMiddleware
    return JSONResponse(
        status_code=500,
        content={"error": "Erreur interne"},
        headers=_cors_headers(request),
    )


@app.on_event("startup")
async def on_startup():
    create_all(None)
    await state.start()


@app.on_event("shutdown")
async def on_shutdown():
    await state.stop()


# Simple health
@app.get("/health")
async def health():
    return {"status": "ok"}
