"""
FastAPI application for the Product Transactions API.

Seeds the SQLite store from the upstream product feed at startup, then
serves read-only listing, statistics and chart endpoints, with OpenAPI
documentation at /docs.
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database import DatabaseManager
from models import DEFAULT_MONTH, InvalidMonthError
from sources.product_feed.pipeline import ProductFeedPipeline
from sources.product_feed.provider import ProductFeedProvider
from .config import settings
from .data_access import TransactionQueryService
from .models import (
    TransactionResponse,
    StatisticsResponse,
    ErrorResponse,
    HealthResponse,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_query_service(request: Request) -> TransactionQueryService:
    """Dependency: the query service owned by the running app."""
    return request.app.state.query_service


def create_app(
    db: Optional[DatabaseManager] = None,
    seed: bool = True,
    provider: Optional[ProductFeedProvider] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        db: Store to serve from; opened at settings.DB_PATH when omitted
            and closed on shutdown
        seed: Load the product feed into the store before serving
        provider: Feed provider override (defaults to settings.FEED_URL)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Any failure here aborts startup before connections are accepted.
        store = db or DatabaseManager(db_path=settings.DB_PATH)
        logger.info(f"Connected to database: {store.db_path}")
        try:
            if seed:
                feed = provider or ProductFeedProvider(
                    url=settings.FEED_URL, timeout=settings.FEED_TIMEOUT
                )
                try:
                    summary = ProductFeedPipeline(store, feed).run()
                finally:
                    if provider is None:
                        feed.close()
                logger.info(
                    f"Seeded transactions: {summary.inserted} new, "
                    f"{summary.skipped} existing, {summary.failed} failed"
                )
            app.state.query_service = TransactionQueryService(store)
            yield
        finally:
            if db is None:
                store.close()
                logger.info("Database connection closed")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected query parameters for {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid query parameters")

    # ----------------------------------------------------------------
    # Health
    # ----------------------------------------------------------------

    @app.get("/", response_model=HealthResponse, tags=["Health"])
    def root(service: TransactionQueryService = Depends(get_query_service)):
        """API health check with the number of stored transactions."""
        try:
            return {
                "service": settings.API_TITLE,
                "version": settings.API_VERSION,
                "status": "healthy",
                "database_path": service.db.db_path,
                "total_transactions": service.total_count(),
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return error_response(500, "Internal Server Error")

    # ----------------------------------------------------------------
    # Transactions
    # ----------------------------------------------------------------

    @app.get(
        "/transactions",
        response_model=List[TransactionResponse],
        responses=ERROR_RESPONSES,
        tags=["Transactions"],
    )
    def list_transactions(
        page: int = Query(1, ge=1, description="1-based page number"),
        per_page: int = Query(10, ge=1, alias="perPage", description="Rows per page"),
        search: str = Query("", description="Substring of title, description or price"),
        month: str = Query(DEFAULT_MONTH, description="Month abbreviation, Jan..Dec"),
        service: TransactionQueryService = Depends(get_query_service),
    ):
        """
        List transactions of a month, paginated and optionally filtered.

        - **page** / **perPage**: pagination (defaults 1 / 10)
        - **search**: matches title, description or price
        - **month**: defaults to Mar
        """
        try:
            rows = service.list_transactions(
                page=page, per_page=per_page, search=search, month=month
            )
            return [TransactionResponse.model_validate(r) for r in rows]
        except InvalidMonthError as e:
            return error_response(400, str(e))
        except Exception as e:
            logger.error(f"Error listing transactions: {e}")
            return error_response(500, "Internal Server Error")

    # ----------------------------------------------------------------
    # Aggregates
    # ----------------------------------------------------------------

    @app.get(
        "/statistics",
        response_model=StatisticsResponse,
        responses=ERROR_RESPONSES,
        tags=["Aggregates"],
    )
    def get_statistics(
        month: Optional[str] = None,
        service: TransactionQueryService = Depends(get_query_service),
    ):
        """Total sale amount, total item count and unsold count for a month."""
        try:
            return service.statistics(month)
        except InvalidMonthError as e:
            return error_response(400, str(e))
        except Exception as e:
            logger.error(f"Error computing statistics for {month}: {e}")
            return error_response(500, "Internal Server Error")

    @app.get(
        "/bar-chart",
        response_model=Dict[str, int],
        responses=ERROR_RESPONSES,
        tags=["Aggregates"],
    )
    def get_bar_chart(
        month: Optional[str] = None,
        service: TransactionQueryService = Depends(get_query_service),
    ):
        """Item counts per price range (0-100 ... 901-above) for a month."""
        try:
            return service.bar_chart(month)
        except InvalidMonthError as e:
            return error_response(400, str(e))
        except Exception as e:
            logger.error(f"Error computing bar chart for {month}: {e}")
            return error_response(500, "Internal Server Error")

    @app.get("/pie-chart", responses=ERROR_RESPONSES, tags=["Aggregates"])
    def get_pie_chart(
        month: Optional[str] = None,
        service: TransactionQueryService = Depends(get_query_service),
    ):
        """Item counts per category for a month."""
        try:
            return service.pie_chart(month)
        except InvalidMonthError as e:
            return error_response(400, str(e))
        except Exception as e:
            logger.error(f"Error computing pie chart for {month}: {e}")
            return error_response(500, "Internal Server Error")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )
