from fastapi import APIRouter, Depends
from app.routers.dependencies import get_store
from app.schemas import BillingRecordRequest, PaymentRequest
from app.services.clinic_store import ClinicStore

router = APIRouter(prefix="/api", tags=["Billing"])


@router.get("/clinicadmin/billing")
def get_billing_records(store: ClinicStore = Depends(get_store)):
    return store.get_billing_records()


@router.post("/clinicadmin/billing", status_code=201)
def create_billing_record(request: BillingRecordRequest, store: ClinicStore = Depends(get_store)):
    return store.create_billing_record(request.details())


@router.get("/clinicadmin/billing/summary")
def get_billing_summary(store: ClinicStore = Depends(get_store)):
    return store.get_billing_summary()


@router.get("/portal/patient/{patient_id}/payments")
def get_patient_payments(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_patient_payments(patient_id)


@router.post("/portal/patient/{patient_id}/payments", status_code=201)
def record_payment(patient_id: int, request: PaymentRequest, store: ClinicStore = Depends(get_store)):
    payment = store.record_payment(patient_id, request.details())
    return {"success": True, "patient_id": patient_id, "payment": payment}


@router.get("/portal/patient/{patient_id}/statements")
def get_patient_statements(patient_id: int, store: ClinicStore = Depends(get_store)):
    return store.get_patient_statements(patient_id)
