import json
from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import ValidationError
from app.logger import logger
from app.models import Appointment
from app.tools.directory import load_doctor, load_patient
from app.tools.validation import parse_date, parse_id, require_fields, utc_now

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def serialize_appointment(apt: Appointment) -> dict:
    return {
        "id": apt.id,
        "patient_id": apt.patient_id,
        "doctor_id": apt.doctor_id,
        "doctor_name": apt.doctor.name if apt.doctor else "Unknown Doctor",
        "specialty": apt.doctor.specialty if apt.doctor else "",
        "date": apt.date,
        "time": apt.time,
        "status": apt.status,
        "reason": apt.reason,
        "created_at": apt.created_at,
        "cancelled_at": apt.cancelled_at,
    }


def _template_for(doctor, day) -> list:
    schedule = json.loads(doctor.schedule) if doctor.schedule else {}
    return schedule.get(WEEKDAYS[day.weekday()], [])


def _booked_times(db: Session, doctor_id: int, date: str) -> set:
    rows = db.query(Appointment.time).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.date == date,
        Appointment.status != "cancelled",
    ).all()
    return {time for (time,) in rows}


def get_available_slots(db: Session, doctor_id, date: str) -> list:
    """Every template slot for the doctor's weekday, tagged with availability."""
    doctor = load_doctor(db, doctor_id)
    day = parse_date(date)
    date = day.isoformat()

    booked = _booked_times(db, doctor.id, date)
    return [
        {
            "doctor_id": doctor.id,
            "date": date,
            "time": time,
            "available": time not in booked,
        }
        for time in _template_for(doctor, day)
    ]


def book_appointment(db: Session, details: dict) -> dict:
    """Book a free template slot for a patient with a doctor."""
    require_fields(details, "patient_id", "doctor_id", "date", "time")

    patient = load_patient(db, details["patient_id"])
    doctor = load_doctor(db, details["doctor_id"])
    day = parse_date(details["date"])
    date = day.isoformat()
    time = str(details["time"]).strip()

    if time not in _template_for(doctor, day):
        raise ValidationError(f"{doctor.name} does not see patients at {time} on {WEEKDAYS[day.weekday()]}")

    if time in _booked_times(db, doctor.id, date):
        raise ValidationError(f"{doctor.name} is already booked on {date} at {time}")

    appointment = Appointment(
        patient_id=patient.id,
        doctor_id=doctor.id,
        date=date,
        time=time,
        status="scheduled",
        reason=details.get("reason") or "General appointment",
        created_at=utc_now(),
    )
    db.add(appointment)
    db.flush()

    logger.info(f"📅 Booked appointment #{appointment.id} with doctor #{doctor.id} on {date} {time}")
    return serialize_appointment(appointment)


def get_appointments(db: Session, patient_id) -> list:
    """All appointments for a patient in booking order, cancelled ones included."""
    patient_id = parse_id(patient_id, "patient_id")
    appointments = db.query(Appointment).filter(
        Appointment.patient_id == patient_id
    ).order_by(Appointment.id).all()
    return [serialize_appointment(apt) for apt in appointments]


def get_appointment(db: Session, patient_id, appointment_id) -> Optional[dict]:
    appointment = _find_appointment(db, appointment_id, parse_id(patient_id, "patient_id"))
    return serialize_appointment(appointment) if appointment else None


def cancel_appointment(db: Session, appointment_id, patient_id=None) -> Optional[dict]:
    """
    Cancel an appointment.

    Returns None when the appointment does not exist (or belongs to another
    patient). Otherwise returns {"appointment": ..., "changed": bool}, where
    changed is False if the appointment was already cancelled.
    """
    if patient_id is not None:
        patient_id = parse_id(patient_id, "patient_id")
    appointment = _find_appointment(db, appointment_id, patient_id)

    if not appointment:
        logger.warning(f"Cancel requested for unknown appointment #{appointment_id}")
        return None

    if appointment.status == "cancelled":
        return {"appointment": serialize_appointment(appointment), "changed": False}

    if appointment.status == "completed":
        raise ValidationError("This appointment has already been completed and cannot be cancelled")

    appointment.status = "cancelled"
    appointment.cancelled_at = utc_now()
    db.flush()

    logger.info(f"❎ Cancelled appointment #{appointment.id}")
    return {"appointment": serialize_appointment(appointment), "changed": True}


def _find_appointment(db: Session, appointment_id, patient_id: Optional[int]) -> Optional[Appointment]:
    appointment = db.get(Appointment, parse_id(appointment_id, "appointment_id"))
    if appointment is None:
        return None
    if patient_id is not None and appointment.patient_id != patient_id:
        return None
    return appointment
