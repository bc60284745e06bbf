# citygrid/main.py
"""
FastAPI application entry point.
Includes security middleware, error handlers, and all routers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from citygrid.routers import assets, parking, waste, power, devices, governance, ledger, health
from citygrid.config import settings
from citygrid.errors import CityError, ErrorCode
from citygrid.services.runtime import build_runtime
from citygrid.utils.logger import get_logger
import time

logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_ASSET: status.HTTP_404_NOT_FOUND,
    ErrorCode.SENSOR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ASSET_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.ASSET_LIMIT_REACHED: status.HTTP_409_CONFLICT,
    ErrorCode.LOW_BALANCE: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.TRANSFER_FAILED: status.HTTP_402_PAYMENT_REQUIRED,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 CityGrid backend starting up...")
    if getattr(app.state, "runtime", None) is None:
        app.state.runtime = build_runtime(settings)
    logger.info(f"🏛️  Administrator: {app.state.runtime.governance.admin}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")
    yield
    logger.info("🛑 CityGrid backend shutting down...")


app = FastAPI(
    title="CityGrid Municipal Resources API",
    description="Parking, waste and energy resources with authorized, paid state transitions.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to dashboard origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth in front of every endpoint except health and docs.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
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


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(CityError)
async def city_error_handler(request: Request, exc: CityError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.code.name} — {exc.message}")
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST),
        content={"error": exc.code.name, "code": int(exc.code), "detail": exc.message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(assets.router,     prefix="/api/v1", tags=["🏛️  Assets"])
app.include_router(parking.router,    prefix="/api/v1", tags=["🅿️  Parking"])
app.include_router(waste.router,      prefix="/api/v1", tags=["🗑️  Waste"])
app.include_router(power.router,      prefix="/api/v1", tags=["⚡ Power"])
app.include_router(devices.router,    prefix="/api/v1", tags=["📡 Devices"])
app.include_router(governance.router, prefix="/api/v1", tags=["🔑 Governance"])
app.include_router(ledger.router,     prefix="/api/v1", tags=["💰 Ledger"])
app.include_router(health.router,     prefix="/api/v1", tags=["💚 Health"])
