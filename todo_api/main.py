"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) crée l’instance FastAPI et configure :

les logs (loguru)

le moteur SQL + pool de connexions (app.state.engine)

CORS (autorisations de qui peut appeler ces API)

le log de chaque requête

les handlers d'erreurs 400 (BadInput, validation)

le router /todos et le schéma OpenAPI personnalisé

Crée la table au démarrage (lifespan), sans jamais toucher aux données existantes.

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn todo_api.main:app --reload (ou la commande todo-api).
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from todo_api.api.v1.routers import todos
from todo_api.core.config import Settings, settings
from todo_api.core.errors import BadInput
from todo_api.core.logging import configure_logging
from todo_api.core.openapi import custom_openapi
from todo_api.db.session import build_engine, init_db


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "{} {} => {} ({:.1f} ms)",
        request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response


async def bad_input_handler(request: Request, exc: BadInput):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    if app_settings is None:
        app_settings = settings
    configure_logging(app_settings)
    engine = build_engine(app_settings)

    # Démarrage / arrêt
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("{} ready on {}", app_settings.APP_NAME, app_settings.SITE_ROOT_URL)
        yield
        engine.dispose()

    app = FastAPI(
        title=app_settings.APP_NAME,
        version="0.1.0",
        openapi_tags=[
            {"name": "todos", "description": "Opérations CRUD et mise à jour partielle des todos"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.engine = engine

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )
    if app_settings.LOG_REQUESTS:
        app.middleware("http")(log_requests)

    app.add_exception_handler(BadInput, bad_input_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Routers
    app.include_router(todos.router)

    # Génération du schéma OpenAPI custom (facultatif, mais propre)
    app.openapi = lambda: custom_openapi(app)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "todo_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=(settings.ENV == "dev"),
    )


if __name__ == "__main__":
    run() # http://localhost:6767
