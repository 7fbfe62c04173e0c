# /app/main.py

# --- Core FastAPI Imports ---
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Router Imports ---
from .routers import dashboard_router

# --- Service Imports for Startup Logic ---
from .core.logging_config import configure_logging
from .services.dashboard_service import dashboard_state
from .services.record_service import RecordService

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    # The first aggregation runs in the background so the API answers
    # immediately with `loading: true` until the reads complete.
    initial_refresh = asyncio.create_task(dashboard_state.refresh(RecordService()))
    yield
    # This code runs ONCE when the application shuts down.
    if not initial_refresh.done():
        logger.info("Shutting down before the initial dashboard load finished.")
        initial_refresh.cancel()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Course Dashboard API",
    description="Statistics for the course-management system: instructors, participants, rooms, courses and enrollments.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Course Dashboard API is running!", "version": app.version}
