from fastapi import APIRouter, Depends, HTTPException
from app.routers.dependencies import get_store
from app.schemas import DoctorReplyRequest, PatientUpdateRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Patient Updates"])


@router.post("/patient-updates", status_code=201)
def create_patient_update(request: PatientUpdateRequest, store: ClinicStore = Depends(get_store)):
    if not request.patient_id or not request.text:
        raise HTTPException(status_code=400, detail="patient_id and text are required")
    return store.create_patient_update(
        request.patient_id,
        request.text,
        mood=request.mood,
        symptoms=request.symptoms,
    )


@router.get("/patient-updates/{patient_id}")
def get_patient_updates(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_patient_updates(patient_id)


@router.get("/patient-updates/{update_id}/detail")
def get_update_detail(update_id: int, store: ClinicStore = Depends(get_store)):
    update = store.get_update_by_id(update_id)
    if not update:
        raise HTTPException(status_code=404, detail="Update not found")
    return update


@router.post("/doctor/{doctor_id}/reply", status_code=201)
def add_doctor_reply(doctor_id: int, request: DoctorReplyRequest, store: ClinicStore = Depends(get_store)):
    if not request.update_id or not request.text:
        raise HTTPException(status_code=400, detail="update_id and text are required")

    reply = store.add_doctor_reply(request.update_id, doctor_id, request.text)
    if not reply:
        raise HTTPException(status_code=404, detail="Update not found")
    return reply


@router.get("/portal/patient/{patient_id}/replies")
def get_doctor_replies(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_doctor_replies(patient_id)
