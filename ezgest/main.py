# ezgest/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger

from .config.setting import settings, validate_settings
from .config.database import db_connection
from .config.logging_config import setup_logging
from .core.exceptions import AuthenticationFailure, EzGestError
from .middleware.authorization import AuthorizationMiddleware
from .models.errors import ErrorResponse
from .api.routes import auth, companies, health, resources

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting EzGest API...")

    try:
        validate_settings()
        logger.info("Configuration validated successfully")
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise

    if not db_connection.connect():
        raise RuntimeError("Database connection failed")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down EzGest API...")
    db_connection.disconnect()
    logger.info("Application shutdown complete")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        openapi_url=settings.OPENAPI_URL,
        lifespan=lifespan if use_lifespan else None
    )

    public_paths = set(settings.PUBLIC_PATHS)
    public_paths.update(path for path in (settings.DOCS_URL, settings.REDOC_URL, settings.OPENAPI_URL) if path)

    # The last middleware added runs first. The gate is outermost so that
    # every OPTIONS request, preflights included, gets its empty 200; it
    # adds the CORS headers to the answers it produces itself.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(
        AuthorizationMiddleware,
        public_paths=public_paths,
        cors_origins=settings.CORS_ORIGINS,
        cors_methods=settings.CORS_ALLOW_METHODS,
        cors_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(EzGestError)
    async def ezgest_error_handler(request: Request, exc: EzGestError):
        if isinstance(exc, AuthenticationFailure):
            return Response(status_code=exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message, error_code=exc.error_code).model_dump(),
        )

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(auth.router, prefix=settings.API_PREFIX, tags=["auth"])
    app.include_router(companies.router, prefix=settings.API_PREFIX, tags=["companies"])
    app.include_router(resources.router, prefix=settings.API_PREFIX, tags=["resources"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "EzGest API",
            "version": settings.API_VERSION,
            "status": "running",
            "debug_mode": settings.DEBUG
        }

    return app


app = create_app()


def run():
    """Console entry point: serve the API with uvicorn"""
    uvicorn.run(
        "ezgest.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
