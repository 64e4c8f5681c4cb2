"""Main application entry point"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from database import load_settings, create_db_engine
from inspector import inspect_schema
from models import DEFAULT_VOCABULARY, InspectionSummary, Vocabulary
from routes import router
from log import log_info, log_error


def startup(app: FastAPI) -> None:
    """Create the pool if needed and take the schema snapshot"""
    log_info("Starting Lexicon Lookup API...")
    if app.state.engine is None:
        try:
            settings = load_settings()
        except Exception as e:
            log_error("StartupError", f"Failed to start application: {e}")
            raise
        app.state.engine = create_db_engine(settings)
        app.state.owns_engine = True
        if app.state.vocabulary is None:
            app.state.vocabulary = settings.vocabulary
        if app.state.target_database is None:
            app.state.target_database = settings.db_name

    if app.state.vocabulary is None:
        app.state.vocabulary = DEFAULT_VOCABULARY

    log_info("Connecting to database...")
    app.state.summary = inspect_schema(
        app.state.engine, app.state.vocabulary, app.state.target_database
    )
    log_info("API is ready to accept requests")


def shutdown(app: FastAPI) -> None:
    log_info("Shutting down Lexicon Lookup API...")
    if app.state.owns_engine:
        app.state.engine.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    yield
    shutdown(app)


def create_app(engine: Optional[Engine] = None,
               vocabulary: Optional[Vocabulary] = None,
               target_database: Optional[str] = None) -> FastAPI:
    """
    Build the API application

    With no engine, settings are read from the environment at startup and
    the connection pool is created from them. A caller-supplied engine
    skips configuration loading and is left open on shutdown.
    """
    app = FastAPI(
        title="Lexicon Lookup API",
        description="Looks words up in whatever dictionary-like tables a database holds",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api", tags=["lexicon"])

    app.state.engine = engine
    app.state.owns_engine = False
    app.state.vocabulary = vocabulary
    app.state.target_database = target_database
    app.state.summary = InspectionSummary()

    return app


app = create_app()


if __name__ == "__main__":
    import sys
    import uvicorn
    from database import ConfigurationError

    try:
        settings = load_settings()
    except ConfigurationError as e:
        log_error("ConfigurationError", str(e))
        sys.exit(1)

    log_info(f"Starting server on {settings.app_host}:{settings.app_port}")
    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level="info"
    )
