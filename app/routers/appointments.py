from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from app.routers.dependencies import get_store
from app.schemas import BookAppointmentRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Scheduling"])


@router.get("/doctors/{doctor_id}/available-slots")
def get_available_slots(
    doctor_id: int,
    date: Optional[str] = None,
    store: ClinicStore = Depends(get_store),
):
    """All of the doctor's slots for the date, each flagged available or not."""
    if not date:
        raise HTTPException(status_code=400, detail="date query parameter is required")
    return store.get_available_slots(doctor_id, date)


@router.post("/patient/book-appointment", status_code=201)
def book_appointment(request: BookAppointmentRequest, store: ClinicStore = Depends(get_store)):
    return store.book_appointment(request.details())


@router.get("/portal/patient/{patient_id}/appointments")
def get_appointments(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_appointments(patient_id)


@router.get("/portal/patient/{patient_id}/appointments/{appointment_id}")
def get_appointment(patient_id: int, appointment_id: int, store: ClinicStore = Depends(get_store)):
    appointment = store.get_appointment(patient_id, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.put("/portal/patient/{patient_id}/appointments/{appointment_id}/cancel")
def cancel_appointment(patient_id: int, appointment_id: int, store: ClinicStore = Depends(get_store)):
    """Cancel an appointment. Cancelling an already-cancelled one is a no-op."""
    result = store.cancel_appointment(appointment_id, patient_id=patient_id)
    if not result:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return result["appointment"]
