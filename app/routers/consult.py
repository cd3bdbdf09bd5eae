from fastapi import APIRouter, Depends
from app.routers.dependencies import get_store
from app.schemas import ConsultConfigRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api/admin/consult", tags=["Consult Templates"])


@router.get("/configs")
def get_consult_configs(store: ClinicStore = Depends(get_store)):
    return store.get_consult_configs()


@router.post("/configs", status_code=201)
def create_consult_config(request: ConsultConfigRequest, store: ClinicStore = Depends(get_store)):
    return store.create_consult_config(request.details())


@router.get("/default-fields")
def get_default_fields(store: ClinicStore = Depends(get_store)):
    return store.get_consult_default_fields()
