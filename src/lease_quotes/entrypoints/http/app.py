from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lease_quotes.adapters.in_memory_quote_repository import InMemoryQuoteRepository
from lease_quotes.entrypoints.http.exception_handlers import register_exception_handlers
from lease_quotes.entrypoints.http.routes.health import router as health_router
from lease_quotes.entrypoints.http.routes.quotes import router as quotes_router
from lease_quotes.infra import config
from lease_quotes.infra.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Process lifecycle:
    - startup: configure logging, create the shared quote repository
    - shutdown: close the repository
    """
    configure_logging(level=config.log_level(), json_lines=config.log_json())

    repository = InMemoryQuoteRepository()
    app.state.quote_repository = repository
    try:
        yield
    finally:
        repository.close()
        app.state.quote_repository = None


def build_app() -> FastAPI:
    app = FastAPI(
        title="Lease Quotes API",
        description="""
        Lease quoting API: price monthly lease payments and keep quotes per client.

        ## Features
        - Calculate a quote (price, down payment, term, residual, annual rate)
        - Save a quote under a client name
        - List a client's saved quotes

        ## Authentication
        Currently no authentication required.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Business rule violations return 400 with every violated rule listed.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
        contact={
            "name": "Lease Quotes Team",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(quotes_router, prefix="/v1")

    return app


app = build_app()
