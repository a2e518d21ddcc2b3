from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchmaker.core.config import settings
from matchmaker.core.container import container
from matchmaker.core.database import check_db_connection, init_db
from matchmaker.core.logging_config import get_logger, setup_logging
from matchmaker.middleware.error_middleware import ErrorHandlingMiddleware
from matchmaker.middleware.logging_middleware import LoggingMiddleware
from matchmaker.routes import api_v1_router

VERSION = "1.0.0"

setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Handles startup and shutdown events
    """
    logger.info("Application starting", extra={"version": VERSION})

    init_db()

    if not check_db_connection():
        logger.error("Failed to connect to database on startup")
    else:
        logger.info("Database connection established")

    yield

    logger.info("Application shutting down...")

    # Release pooled connections held for the AI provider
    await container.http_client().close()


app = FastAPI(
    title="Matchmaker",
    description="Matching and recommendation engine for a dating app",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    db_status = check_db_connection()
    return {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
        "version": VERSION,
    }


app.include_router(api_v1_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8001, reload=True, log_level="info")
