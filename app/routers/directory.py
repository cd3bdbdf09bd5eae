from typing import Optional

from fastapi import APIRouter, Depends
from app.routers.dependencies import get_store
from app.schemas import PatientRegistrationRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Directory"])


# ── Doctors ──────────────────────────────────────────

@router.get("/doctors/search")
def search_doctors(
    query: Optional[str] = None,
    specialty: Optional[str] = None,
    store: ClinicStore = Depends(get_store),
):
    return store.search_doctors(query=query, specialty=specialty)


@router.get("/doctors/specialties")
def get_specialties(store: ClinicStore = Depends(get_store)):
    return store.get_specialties()


@router.get("/doctors/{doctor_id}")
def get_doctor(doctor_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_doctor(doctor_id)


# ── Patients ─────────────────────────────────────────

@router.post("/clinicadmin/patients/register-full", status_code=201)
def register_patient(request: PatientRegistrationRequest, store: ClinicStore = Depends(get_store)):
    """Register a patient. The response carries the initial credentials once."""
    return store.register_patient(request.details())


@router.get("/clinicadmin/patients")
def list_patients(store: ClinicStore = Depends(get_store)):
    return store.list_patients()


@router.get("/clinicadmin/patients/{patient_id}")
def get_patient(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_patient(patient_id)
