import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.dependencies import clear_snapshot_cache, get_snapshot
from app.routers import architecture
from archlens import get_runtime_version


def create_app() -> FastAPI:
    # Respect runtime env overrides (tests, temporary runs).
    get_settings.cache_clear()
    clear_snapshot_cache()
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title=settings.app_name, version=get_runtime_version())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins or ["http://127.0.0.1", "http://localhost"],
        allow_origin_regex=settings.cors_allow_origin_regex,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Load once at startup so a broken fixture set fails fast.
    snapshot = get_snapshot()
    logging.getLogger(__name__).info(
        "Serving architecture model from %s (%s)", settings.data_path, snapshot.dataset.counts()
    )

    app.include_router(architecture.router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/api/health")
    def api_health():
        return {"status": "ok", "version": get_runtime_version()}

    return app


app = create_app()
