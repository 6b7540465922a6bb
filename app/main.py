from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.dependencies import AnalysisStore
from app.api.routes import router
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.health_analysis_repository import HealthAnalysisRepository
from app.logging.logger import Log
from app.pdf.extractor import PdfTextExtractor
from app.pdf.factory import PdfExtractorFactory
from app.processor.aggregator import BatchAggregator, build_aggregator


def create_app(
    settings: Settings | None = None,
    *,
    aggregator: BatchAggregator | None = None,
    pdf_extractor: PdfTextExtractor | None = None,
    store: AnalysisStore | None = None,
) -> FastAPI:
    """Build the API with all required adapters.

    The database pool is only opened when no store is injected.
    """
    settings = settings or Settings()
    Log.configure(settings.log_level)
    owns_pool = store is None

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if owns_pool:
            init_pool(settings)
        Log.info(f"Service started ({settings.app_env})")
        try:
            yield
        finally:
            if owns_pool:
                close_pool()
            Log.info("Service shut down")

    app = FastAPI(title="Health report metrics extractor", lifespan=lifespan)
    app.state.settings = settings
    app.state.pdf_extractor = pdf_extractor or PdfExtractorFactory.create(settings)
    app.state.aggregator = aggregator or build_aggregator(settings)
    app.state.store = store or HealthAnalysisRepository()
    app.include_router(router)
    return app


def main() -> None:
    """Entry point: load settings -> build app -> serve."""
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
