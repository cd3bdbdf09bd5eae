import json
import uuid
from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError, ValidationError
from app.logger import logger
from app.models import Doctor, Patient
from app.services.security import MAX_PASSWORD_BYTES, generate_password, hash_password, verify_password
from app.tools.validation import parse_id, require_fields, utc_now

PATIENT_PROFILE_FIELDS = (
    "email",
    "phone",
    "dob",
    "gender",
    "address",
    "emergency_contact",
    "emergency_phone",
    "insurance_provider",
    "insurance_id",
    "group_number",
)


def serialize_patient(patient: Patient) -> dict:
    result = {"id": patient.id, "name": patient.name, "username": patient.username}
    for field in PATIENT_PROFILE_FIELDS:
        result[field] = getattr(patient, field) or ""
    result["created_at"] = patient.created_at
    return result


def serialize_doctor(doctor: Doctor) -> dict:
    return {
        "id": doctor.id,
        "name": doctor.name,
        "specialty": doctor.specialty,
        "qualification": doctor.qualification,
        "email": doctor.email,
        "phone": doctor.phone,
        "consultation_fee": doctor.consultation_fee,
        "schedule": json.loads(doctor.schedule) if doctor.schedule else {},
    }


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ── Patients ─────────────────────────────────────────


def register_patient(db: Session, details: dict) -> dict:
    """Register a new patient and hand back one-time credentials."""
    require_fields(details, "name")

    username = (details.get("username") or "").strip()
    if username and db.query(Patient).filter(Patient.username == username).first():
        raise ValidationError(f"Username '{username}' is already taken")

    password = details.get("password") or generate_password()
    if not isinstance(password, str):
        raise ValidationError("password must be a string")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    patient = Patient(
        name=details["name"].strip(),
        # Placeholder until the id is known
        username=username or f"pending-{uuid.uuid4().hex}",
        password_hash=hash_password(password),
        created_at=utc_now(),
        **{field: details.get(field) or "" for field in PATIENT_PROFILE_FIELDS},
    )
    db.add(patient)
    db.flush()

    if not username:
        username = f"patient{patient.id}"
        suffix = 1
        while db.query(Patient).filter(Patient.username == username).first():
            suffix += 1
            username = f"patient{patient.id}-{suffix}"
        patient.username = username

    logger.info(f"🧾 Registered patient #{patient.id}")

    result = serialize_patient(patient)
    result["credentials"] = {"username": patient.username, "password": password}
    return result


def patient_login(db: Session, username: str, password: str) -> Optional[dict]:
    """Match a username and password. Returns None on any mismatch, never raises."""
    if not username or not password:
        return None
    if len(str(password).encode("utf-8")) > MAX_PASSWORD_BYTES:
        return None

    patient = db.query(Patient).filter(Patient.username == username).first()
    if not patient or not verify_password(password, patient.password_hash):
        logger.warning("🔒 Patient login rejected")
        return None

    return {"success": True, "patient_id": patient.id, "name": patient.name}


def get_patient(db: Session, patient_id) -> dict:
    return serialize_patient(load_patient(db, patient_id))


def list_patients(db: Session) -> list:
    return [serialize_patient(p) for p in db.query(Patient).order_by(Patient.id).all()]


def load_patient(db: Session, patient_id) -> Patient:
    patient_id = parse_id(patient_id, "patient_id")
    patient = db.get(Patient, patient_id)
    if not patient:
        raise NotFoundError(f"Patient {patient_id} not found")
    return patient


# ── Doctors ──────────────────────────────────────────


def search_doctors(db: Session, query: str = None, specialty: str = None) -> list:
    """Search doctors by free text (name or specialty) and exact specialty."""
    doctors = db.query(Doctor)

    if specialty:
        doctors = doctors.filter(Doctor.specialty == specialty)
    if query and query.strip():
        pattern = f"%{_escape_like(query.strip())}%"
        doctors = doctors.filter(
            Doctor.name.ilike(pattern, escape="\\") | Doctor.specialty.ilike(pattern, escape="\\")
        )

    return [serialize_doctor(doc) for doc in doctors.order_by(Doctor.id).all()]


def get_doctor(db: Session, doctor_id) -> dict:
    return serialize_doctor(load_doctor(db, doctor_id))


def get_specialties(db: Session) -> list:
    """Distinct specialties, in the order their first doctor was added."""
    specialties = []
    for (name,) in db.query(Doctor.specialty).order_by(Doctor.id).all():
        if name not in specialties:
            specialties.append(name)
    return specialties


def load_doctor(db: Session, doctor_id) -> Doctor:
    doctor_id = parse_id(doctor_id, "doctor_id")
    doctor = db.get(Doctor, doctor_id)
    if not doctor:
        raise NotFoundError(f"Doctor {doctor_id} not found")
    return doctor
