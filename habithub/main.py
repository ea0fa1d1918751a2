# ============================================================================
# FILE: habithub/main.py
# ============================================================================
"""
The three HabitHub services.

    uvicorn habithub.main:auth_app --port 3001
    uvicorn habithub.main:upload_app --port 3002
    uvicorn habithub.main:media_app --port 3003

They share one database and one token contract; each verifies tokens on
its own with the same JWT_SECRET.
"""
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from habithub.api.v1.router import auth_router, media_router, upload_router
from habithub.config import get_settings
from habithub.core.errors import AppError, app_error_handler
from habithub.core.logging import setup_logging
from habithub.core.security import TokenConfig, TokenIssuer, TokenVerifier
from habithub.core.upload_client import UploadClient
from habithub.db.base import Base
from habithub.db.seed import seed_defaults
from habithub.db.session import get_engine, get_sessionmaker
from habithub.services.upload_service import UploadService
import habithub.db.models  # noqa: F401  (registers tables on Base.metadata)
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

SERVICES = {
    "auth": ("Auth API", auth_router),
    "media": ("Media API", media_router),
    "upload": ("Upload API", upload_router),
}

def init_db() -> None:
    """Create tables and seed defaults into empty ones"""
    Base.metadata.create_all(bind=get_engine())
    db = get_sessionmaker()()
    try:
        seed_defaults(db)
    finally:
        db.close()

def create_app(service: str) -> FastAPI:
    name, router = SERVICES[service]
    settings = get_settings()
    title = f"{settings.APP_NAME} {name}"

    app = FastAPI(title=title, version="1.0.0")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, app_error_handler)

    # Include API v1 router
    app.include_router(router, prefix="/api/v1")

    if service == "upload":
        # Directory is created at startup
        app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

    @app.on_event("startup")
    async def startup_event():
        """Build the token contract and service clients; refuse to start without a secret"""
        logger.info(f"Starting {title}")
        settings = get_settings()
        token_config = TokenConfig.from_settings(settings)
        app.state.token_verifier = TokenVerifier(token_config)

        if service == "auth":
            app.state.token_issuer = TokenIssuer(token_config)
        if service in ("auth", "media"):
            app.state.upload_client = UploadClient.from_settings(settings)
            init_db()
        if service == "upload":
            Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
            app.state.upload_service = UploadService(settings.UPLOAD_DIR, max_bytes=settings.MAX_UPLOAD_BYTES)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {title}")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        return {"message": "API location: api/v1"}

    return app

auth_app = create_app("auth")
media_app = create_app("media")
upload_app = create_app("upload")
