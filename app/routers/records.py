from typing import Optional

from fastapi import APIRouter, Depends
from app.routers.dependencies import get_store
from app.schemas import SaveSummaryRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Clinical Records"])


@router.post("/save-summary", status_code=201)
def save_summary(request: SaveSummaryRequest, store: ClinicStore = Depends(get_store)):
    return store.save_summary(request.details())


@router.get("/history")
def get_history(
    limit: Optional[int] = None,
    patient_id: Optional[int] = None,
    store: ClinicStore = Depends(get_store),
):
    """Archived summaries, oldest first. ?limit=N keeps only the N most recent."""
    return store.get_summaries(limit=limit, patient_id=patient_id)


@router.get("/medications/timeline")
def get_medications_timeline(patient_id: Optional[int] = None, store: ClinicStore = Depends(get_store)):
    return store.get_medications_timeline(patient_id=patient_id)


@router.get("/test-results/names")
def get_test_result_names(store: ClinicStore = Depends(get_store)):
    return store.get_test_result_names()


@router.get("/test-results/history/{test_name}")
def get_test_result_history(test_name: str, store: ClinicStore = Depends(get_store)):
    return store.get_test_result_history(test_name)
