"""FitCheck FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitcheck.api.assessments import router as assessments_router
from fitcheck.api.health import router as health_router
from fitcheck.api.stats import router as stats_router
from fitcheck.config import Settings, settings as default_settings
from fitcheck.services.vision import GeminiSafetyAnalyzer, SafetyAnalyzer
from fitcheck.storage.memory import AssessmentStore

logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: AssessmentStore | None = None,
    analyzer: SafetyAnalyzer | None = None,
) -> FastAPI:
    """Build the app with one store and one analyzer shared by all requests."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.gemini_configured:
            logger.warning("GEMINI_API_KEY is not set; assessments will fail analysis")
        logger.info("FitCheck starting (model=%s)", settings.gemini_model)
        # Injected analyzers belong to the caller; the Gemini one lives per startup.
        owned_analyzer = None
        if analyzer is None:
            owned_analyzer = GeminiSafetyAnalyzer.from_settings(settings)
            app.state.analyzer = owned_analyzer
        try:
            yield
        finally:
            if owned_analyzer is not None:
                app.state.analyzer = None
                await owned_analyzer.aclose()
            logger.info("FitCheck shutting down")

    app = FastAPI(
        title="FitCheck - Fitness-for-Duty Assessments",
        description="Captures worker selfies, judges fitness for duty with a vision model, "
        "and tracks reviewer decisions",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.store = store if store is not None else AssessmentStore()
    app.state.analyzer = analyzer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, tags=["Health"])
    app.include_router(assessments_router, prefix="/api", tags=["Assessments"])
    app.include_router(stats_router, prefix="/api", tags=["Statistics"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"service": "FitCheck", "version": "0.1.0", "docs": "/docs"}

    return app


app = create_app()
