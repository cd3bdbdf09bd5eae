from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.data.seed import seed_database
from app.exceptions import ClinicError, InternalError
from app.logger import logger
from app.services.clinic_store import ClinicStore
from app.services.metrics import metrics
from app.routers import appointments, auth, billing, consult, directory, fallback, records, updates


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # ── Startup ──
    logger.info(f"🏥 Starting {settings.CLINIC_NAME} operations backend...")

    store = ClinicStore(settings.DATABASE_URL)
    if settings.SEED_DEMO_DATA:
        seed_database(store)
    app.state.store = store

    logger.info("✅ Clinic store ready")

    yield

    # ── Shutdown ──
    store.close()
    logger.info("👋 Clinic store shut down")


# ── Create FastAPI App ───────────────────────────────

app = FastAPI(
    title=f"{settings.CLINIC_NAME} - Operations API",
    description="Patient registration, scheduling, billing, clinical records and patient updates",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ────────────────────────────────────

@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    if isinstance(exc, InternalError):
        return JSONResponse(status_code=500, content={"detail": exc.message})
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg', 'invalid value')}" if location else errors[0].get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "An internal error occurred. Please try again."})


# Routers (fallback last so it only sees unmatched paths)
app.include_router(auth.router)
app.include_router(directory.router)
app.include_router(appointments.router)
app.include_router(billing.router)
app.include_router(records.router)
app.include_router(updates.router)
app.include_router(consult.router)
app.include_router(fallback.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.CLINIC_NAME,
        "store_ready": getattr(app.state, "store", None) is not None,
    }


@app.get("/metrics")
async def get_metrics():
    """Expose store operation metrics for monitoring."""
    return metrics.snapshot()
