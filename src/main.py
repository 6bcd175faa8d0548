"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src.api import auth, diary, friends, users
from src.config import get_settings
from src.exceptions import DailyMateError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting DailyMate API ({settings.environment})")
    yield


app = FastAPI(
    title="DailyMate API",
    description="Diary sharing with friends, likes and monthly calendars",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(DailyMateError)
async def domain_exception_handler(request: Request, exc: DailyMateError):
    """Translate service-layer errors into JSON error responses."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(diary.router)
app.include_router(friends.router)

# Uploaded images
app.mount(
    settings.media_url,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="media",
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
