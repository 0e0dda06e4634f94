"""FastAPI application entry point for DreamRate."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dreamrate.api.v1 import router as v1_router
from dreamrate.config import get_settings
from dreamrate.dependencies import get_db_client
from dreamrate.middleware.error_handler import ErrorHandlerMiddleware
from dreamrate.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

settings = get_settings()

configure_logging(debug=settings.debug)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to the store at startup; a missing setting aborts startup."""
    logger.info(f"Starting {settings.app_name} API {settings.api_version}")
    await get_db_client()
    logger.info(f"Running in {settings.environment} mode")

    yield

    logger.info(f"Shutting down {settings.app_name} API")


app = FastAPI(
    title=settings.app_name,
    description="Dream journal API: share dreams, read others', rate and review them",
    version=settings.api_version,
    lifespan=lifespan,
)

# Error handler first (innermost), CORS last (outermost, answers preflight).
app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get(
    "/health",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> JSONResponse:
    """Health check endpoint for monitoring."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "dreamrate.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
