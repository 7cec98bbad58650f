from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.api.middleware.error_handler import (
    handle_categorization_error,
    handle_database_error,
    handle_generic_error,
    handle_validation_error,
)
from app.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from app.api.v1 import router as v1_router
from app.api.v1.health import router as health_router
from app.config import settings
from app.core.exceptions import CategorizationError


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level, settings.log_json)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Finance Auto-Categorization API",
        description="Hybrid category suggestions for personal finance transactions",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Most specific first
    app.add_exception_handler(CategorizationError, handle_categorization_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
