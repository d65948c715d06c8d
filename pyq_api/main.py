import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from pyq_api.core.config import Settings, get_settings
from pyq_api.core.errors import register_exception_handlers
from pyq_api.core.logging import setup_logging
from pyq_api.routers import system, universities, papers, stats
from pyq_api.services.catalog import CatalogService
from pyq_api.services.catalog_store import CatalogStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Dossier des uploads créé au démarrage du serveur, pas à l'import
    Path(app.state.settings.UPLOAD_PATH).mkdir(parents=True, exist_ok=True)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API du catalogue de sujets d'examens (PYQ) : universités, papiers, uploads",
        lifespan=lifespan,
    )

    # Un seul catalogue en mémoire par application
    app.state.settings = settings
    app.state.catalog = CatalogService(CatalogStore(seed=settings.SEED_SAMPLE_DATA))

    # Middleware CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(universities.router)
    app.include_router(papers.router)
    app.include_router(stats.router)

    # Fichiers uploadés servis tels quels
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.UPLOAD_PATH, check_dir=False),
        name="uploads",
    )

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return app


app = create_app()


def run() -> None:
    """Point d'entrée `pyq-api` : lance uvicorn sur l'app du module."""
    import uvicorn

    uvicorn.run(
        "pyq_api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        reload=bool(os.getenv("DEV")),
    )
