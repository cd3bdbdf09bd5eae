import secrets

from fastapi import APIRouter, Depends, HTTPException
from app.config import settings
from app.logger import logger
from app.routers.dependencies import get_store
from app.schemas import AdminLoginResponse, LoginRequest, PatientLoginResponse
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/patient/login", response_model=PatientLoginResponse)
def patient_login(request: LoginRequest, store: ClinicStore = Depends(get_store)):
    """Check a patient's username and password."""
    if not request.username or not request.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    result = store.patient_login(request.username, request.password)
    if not result:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return result


@router.post("/auth/admin/login", response_model=AdminLoginResponse)
def admin_login(request: LoginRequest):
    """Check the clinic admin console credentials from settings."""
    if not request.username or not request.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    username_ok = secrets.compare_digest(request.username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = secrets.compare_digest(request.password.encode(), settings.ADMIN_PASSWORD.encode())
    if not (username_ok and password_ok):
        logger.warning("🔒 Admin login rejected")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return AdminLoginResponse(
        success=True,
        clinic_id=settings.ADMIN_CLINIC_ID,
        name=f"{settings.CLINIC_NAME} Admin",
    )
