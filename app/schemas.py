from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional

# Bodies are deliberately loose: required-field and type checks happen in
# the store so that HTTP callers and direct callers get the same errors.


class StoreRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    def details(self) -> dict:
        return self.model_dump(exclude_none=True)


# ── Auth ──────────────────────────────────────────────

class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class PatientLoginResponse(BaseModel):
    success: bool
    patient_id: int
    name: str


class AdminLoginResponse(BaseModel):
    success: bool
    clinic_id: int
    name: str


# ── Directory ─────────────────────────────────────────

class PatientRegistrationRequest(StoreRequest):
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


# ── Scheduling ────────────────────────────────────────

class BookAppointmentRequest(StoreRequest):
    patient_id: Optional[Any] = None
    doctor_id: Optional[Any] = None
    date: Optional[str] = None
    time: Optional[str] = None
    reason: Optional[str] = None


# ── Billing ───────────────────────────────────────────

class BillingRecordRequest(StoreRequest):
    patient_id: Optional[Any] = None
    amount: Optional[Any] = None
    status: Optional[str] = None


class PaymentRequest(StoreRequest):
    amount: Optional[Any] = None
    method: Optional[str] = None
    description: Optional[str] = None


# ── Clinical records ──────────────────────────────────

class SaveSummaryRequest(StoreRequest):
    patient_id: Optional[Any] = None
    patient_name: Optional[str] = None
    summary: Optional[str] = None
    filename: Optional[str] = None


# ── Patient engagement ────────────────────────────────

class PatientUpdateRequest(BaseModel):
    patient_id: Optional[Any] = None
    text: Optional[str] = None
    mood: Optional[str] = None
    symptoms: Optional[List[str]] = None


class DoctorReplyRequest(BaseModel):
    update_id: Optional[Any] = None
    text: Optional[str] = None


# ── Consult templates ─────────────────────────────────

class ConsultConfigRequest(StoreRequest):
    name: Optional[str] = None
    type: Optional[str] = None
    fields: Optional[List[str]] = None
