"""
Chatter Gateway - Main Application Entry Point

Multi-provider chat gateway with per-user history, settings, snippets and images.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from chatter.core.config import get_settings
from chatter.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    UpstreamError,
    ValidationError,
)
from chatter.core.logger import logger

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(
        f"Starting Chatter Gateway in {settings.ENVIRONMENT} mode "
        f"(storage={settings.STORAGE_PROVIDER})..."
    )
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; chat requests will fail")

    yield

    logger.info("Shutting down Chatter Gateway...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Chatter Gateway",
        description="Multi-provider chat gateway with per-user persistence",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # ===========================================
    # Error mapping
    # ===========================================

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError):
        logger.error(f"Storage error on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage operation failed"},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": exc.message})

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from chatter.api import auth, chat, history, images, models, snippets
    from chatter.api import settings as settings_api

    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(history.router, prefix="/api/history", tags=["history"])
    app.include_router(settings_api.router, prefix="/api/settings", tags=["settings"])
    app.include_router(snippets.router, prefix="/api/snippets", tags=["snippets"])
    app.include_router(models.router, prefix="/api/models", tags=["models"])
    app.include_router(images.router, prefix="/api/images", tags=["images"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
