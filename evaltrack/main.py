"""
FastAPI main application
Evaluation tracker - campuses, juries, students and scored evaluations

Modular architecture with separated API routers in evaltrack/api/:
- auth.py: Login, logout and session check
- sessions.py: Evaluation sessions, juries and students
- evaluations.py: Evaluation submission and averaged results
- health.py: Health check

All routers access shared services via the evaltrack.state module.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from evaltrack import state
from evaltrack.config import load_config
from evaltrack.core.directory import IdentityVerifier
from evaltrack.core.store import MemoryDocumentStore
from evaltrack.errors import EvalTrackError
from evaltrack.models import AppConfig

# Import all API routers
from evaltrack.api import auth, evaluations, health, sessions


logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[MemoryDocumentStore] = None,
    directory: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """
    Build the application

    Args:
        config: Configuration (loaded from YAML when omitted)
        store: Document store (JSON file at config.data_path when omitted)
        directory: Credential check (campus allow-list when omitted)
    """
    config = config or load_config()

    # Setup logging
    logging.basicConfig(
        level=config.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        # Startup: load the document and install services into global state
        try:
            state.init_services(config, store=store, directory=directory)
            logger.info(f"✅ Server started with data file {config.data_path}")
        except Exception as e:
            logger.error(f"❌ Failed to load data: {e}")
            raise

        yield

        # Shutdown
        state.reset_services()
        logger.info("🛑 Server shutting down")

    app = FastAPI(
        title="Evaluation Tracker",
        description="Campus evaluation sessions, jury scoring forms and per-student averages",
        version="1.0.0",
        lifespan=lifespan
    )

    # Signed cookie holding the logged-in campus
    app.add_middleware(SessionMiddleware, secret_key=config.session_secret())

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EvalTrackError)
    async def evaltrack_error_handler(request: Request, exc: EvalTrackError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"⛔ {request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"⛔ {request.method} {request.url.path} -> 400 {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request."})

    # ==================== INCLUDE ROUTERS ====================

    # Login / logout (POST /api/login, GET /api/logout, GET /api/checkSession)
    app.include_router(auth.router)

    # Sessions, juries, students (/api/sessions/...)
    app.include_router(sessions.router)

    # Evaluations (POST /api/submitEvaluation, GET /api/resultsWithAverages)
    app.include_router(evaluations.router)

    # Health check (GET /api/health)
    app.include_router(health.router)

    # ==================== STATIC FILES ====================

    # Browser front-end served at the root
    if os.path.isdir(config.static_dir):
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")

    return app


settings = load_config()
app = create_app(settings)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
