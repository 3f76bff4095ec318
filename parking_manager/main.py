# parking_manager/main.py
"""
FastAPI application entry point.
Includes security middleware, domain/global error handlers, and all routers.
The ParkingManager is built on startup and kept in app.state.manager.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from parking_manager.routers import employees, parking_spaces, assignments, availability, data, health
from parking_manager.database import SessionLocal, create_tables
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.services.storage_service import StorageService
from parking_manager.config import settings
from parking_manager.utils.errors import ParkingValidationError, NotFoundError, PersistenceError
from parking_manager.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Parking Assignment Manager API",
    description="Employees, parking spaces and pico y placa aware assignments.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (the browser front end is served from another origin) ──────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional API key auth. Set API_KEY in .env to enable it;
    health check and docs stay open.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Domain Exception Handlers ────────────────────────────────────────────────
@app.exception_handler(ParkingValidationError)
async def validation_error_handler(request: Request, exc: ParkingValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"Persistence failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Data could not be saved, no changes were applied"},
    )


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(employees.router,      prefix="/api/v1", tags=["Employees"])
app.include_router(parking_spaces.router, prefix="/api/v1", tags=["Parking Spaces"])
app.include_router(assignments.router,    prefix="/api/v1", tags=["Assignments"])
app.include_router(availability.router,   prefix="/api/v1", tags=["Analytics"])
app.include_router(data.router,           prefix="/api/v1", tags=["Data"])
app.include_router(health.router,         prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Parking Manager starting up...")
    create_tables()
    logger.info("Database tables ready")

    manager = ParkingManager(StorageService(SessionLocal))
    await manager.load()
    app.state.manager = manager

    logger.info(f"Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Parking Manager shutting down...")
