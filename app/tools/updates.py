import json
from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError, ValidationError
from app.logger import logger
from app.models import Doctor, DoctorReply, PatientUpdate
from app.tools.directory import load_patient
from app.tools.validation import parse_id, require_fields, utc_now


def serialize_reply(reply: DoctorReply) -> dict:
    return {
        "id": reply.id,
        "doctor_id": reply.doctor_id,
        "doctor_name": reply.doctor_name,
        "text": reply.text,
        "created_at": reply.created_at,
    }


def serialize_update(update: PatientUpdate) -> dict:
    return {
        "id": update.id,
        "patient_id": update.patient_id,
        "text": update.text,
        "mood": update.mood,
        "symptoms": json.loads(update.symptoms) if update.symptoms else [],
        "recorded_at": update.recorded_at,
        "replies": [serialize_reply(r) for r in update.replies],
    }


def create_patient_update(db: Session, patient_id, text: str, mood: str = None, symptoms: list = None) -> dict:
    """Append a journal-style check-in for a patient."""
    require_fields({"patient_id": patient_id, "text": text}, "patient_id", "text")
    patient = load_patient(db, patient_id)

    if symptoms is not None and not isinstance(symptoms, list):
        raise ValidationError("symptoms must be a list")

    update = PatientUpdate(
        patient_id=patient.id,
        text=str(text).strip(),
        mood=mood or None,
        symptoms=json.dumps([str(s) for s in symptoms]) if symptoms else None,
        recorded_at=utc_now(),
    )
    db.add(update)
    db.flush()

    logger.info(f"📝 Patient #{patient.id} posted update #{update.id}")
    return serialize_update(update)


def get_patient_updates(db: Session, patient_id) -> list:
    patient_id = parse_id(patient_id, "patient_id")
    updates = db.query(PatientUpdate).filter(
        PatientUpdate.patient_id == patient_id
    ).order_by(PatientUpdate.recorded_at, PatientUpdate.id).all()
    return [serialize_update(u) for u in updates]


def get_update_by_id(db: Session, update_id) -> Optional[dict]:
    update = db.get(PatientUpdate, parse_id(update_id, "update_id"))
    return serialize_update(update) if update else None


def add_doctor_reply(db: Session, update_id, doctor_id, text: str) -> Optional[dict]:
    """Attach a doctor's reply to a patient update. None if the update is unknown."""
    require_fields({"update_id": update_id, "text": text}, "update_id", "text")

    update = db.get(PatientUpdate, parse_id(update_id, "update_id"))
    if not update:
        return None

    doctor_id = parse_id(doctor_id, "doctor_id")
    doctor = db.get(Doctor, doctor_id)
    if not doctor:
        raise NotFoundError(f"Doctor {doctor_id} not found")

    reply = DoctorReply(
        update_id=update.id,
        doctor_id=doctor.id,
        doctor_name=doctor.name,
        text=str(text).strip(),
        created_at=utc_now(),
    )
    db.add(reply)
    db.flush()

    logger.info(f"💬 Reply #{reply.id} added to update #{update.id}")
    return serialize_reply(reply)


def get_doctor_replies(db: Session, patient_id) -> list:
    """Every reply to a patient's updates, tagged with the update it answers."""
    replies = []
    for update in get_patient_updates(db, patient_id):
        for reply in update["replies"]:
            replies.append({**reply, "update_id": update["id"], "update_text": update["text"]})
    return replies
