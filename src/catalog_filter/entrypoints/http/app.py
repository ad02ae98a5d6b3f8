from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from catalog_filter.entrypoints.http.exception_handlers import register_exception_handlers
from catalog_filter.entrypoints.http.routes.filter import router as filter_router
from catalog_filter.entrypoints.http.routes.health import router as health_router
from catalog_filter.infra.catalog.client import close_http_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    close_http_client()


def build_app() -> FastAPI:
    app = FastAPI(
        title="Catalog Filter API",
        description="""
        Filtered, re-paginated view over an upstream product catalog.

        ## Features
        - Text search, price/rating/review ranges and stock filtering
        - Stable output page sizes regardless of the upstream paging
        - Stateless resume via caller-held continuation state

        ## Authentication
        No authentication required.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(filter_router, prefix="/v1")

    return app


app = build_app()
