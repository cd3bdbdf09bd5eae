from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import ValidationError
from app.logger import logger
from app.models import MedicationEntry, Summary, TestResult
from app.tools.validation import parse_date, parse_id, parse_number, require_fields, utc_now

MEDICATION_STATUSES = ("active", "discontinued")


# ── Visit summaries ──────────────────────────────────


def serialize_summary(s: Summary) -> dict:
    return {
        "id": s.id,
        "patient_id": s.patient_id,
        "patient_name": s.patient_name,
        "summary": s.summary,
        "filename": s.filename,
        "created_at": s.created_at,
    }


def save_summary(db: Session, details: dict) -> dict:
    """Archive a processed document summary."""
    require_fields(details, "patient_name", "summary", "filename")

    patient_id = details.get("patient_id")
    summary = Summary(
        patient_id=parse_id(patient_id, "patient_id") if patient_id else None,
        patient_name=details["patient_name"],
        summary=details["summary"],
        filename=details["filename"],
        created_at=utc_now(),
    )
    db.add(summary)
    db.flush()

    logger.info(f"🗂️ Archived summary #{summary.id} ({summary.filename})")
    return serialize_summary(summary)


def get_summaries(db: Session, limit: Optional[int] = None, patient_id=None) -> list:
    """Summaries oldest first; with a positive limit, only the most recent ones."""
    summaries = db.query(Summary)
    if patient_id is not None:
        summaries = summaries.filter(Summary.patient_id == parse_id(patient_id, "patient_id"))

    if limit and limit > 0:
        latest = summaries.order_by(Summary.id.desc()).limit(limit).all()
        return [serialize_summary(s) for s in reversed(latest)]

    return [serialize_summary(s) for s in summaries.order_by(Summary.id).all()]


# ── Medications ──────────────────────────────────────


def serialize_medication(med: MedicationEntry) -> dict:
    return {
        "id": med.id,
        "patient_id": med.patient_id,
        "name": med.name,
        "start_date": med.start_date,
        "end_date": med.end_date,
        "status": med.status,
    }


def record_medication(db: Session, details: dict) -> dict:
    require_fields(details, "name", "start_date")

    start_date = parse_date(details["start_date"], "start_date").isoformat()
    end_date = None
    if details.get("end_date"):
        end_date = parse_date(details["end_date"], "end_date").isoformat()
        if end_date < start_date:
            raise ValidationError("end_date cannot be before start_date")

    status = details.get("status") or ("discontinued" if end_date else "active")
    if status not in MEDICATION_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(MEDICATION_STATUSES)}")

    patient_id = details.get("patient_id")
    medication = MedicationEntry(
        patient_id=parse_id(patient_id, "patient_id") if patient_id else None,
        name=details["name"].strip(),
        start_date=start_date,
        end_date=end_date,
        status=status,
        recorded_at=utc_now(),
    )
    db.add(medication)
    db.flush()
    return serialize_medication(medication)


def get_medications_timeline(db: Session, patient_id=None) -> list:
    """Medications ordered by when they were started."""
    medications = db.query(MedicationEntry)
    if patient_id is not None:
        medications = medications.filter(MedicationEntry.patient_id == parse_id(patient_id, "patient_id"))
    medications = medications.order_by(MedicationEntry.start_date, MedicationEntry.id).all()
    return [serialize_medication(m) for m in medications]


# ── Lab test results ─────────────────────────────────


def serialize_test_result(result: TestResult) -> dict:
    return {
        "id": result.id,
        "patient_id": result.patient_id,
        "name": result.name,
        "value": result.value,
        "unit": result.unit,
        "reference_min": result.reference_min,
        "reference_max": result.reference_max,
        "status": result.status,
        "date": result.date,
    }


def classify_result(value: float, reference_min: Optional[float], reference_max: Optional[float]) -> str:
    if reference_min is not None and value < reference_min:
        return "low"
    if reference_max is not None and value > reference_max:
        return "high"
    return "normal"


def record_test_result(db: Session, details: dict) -> dict:
    require_fields(details, "name", "date")

    value = parse_number(details.get("value"), "value", allow_negative=True)
    reference_min = details.get("reference_min")
    reference_max = details.get("reference_max")
    if reference_min is not None:
        reference_min = parse_number(reference_min, "reference_min", allow_negative=True)
    if reference_max is not None:
        reference_max = parse_number(reference_max, "reference_max", allow_negative=True)

    patient_id = details.get("patient_id")
    result = TestResult(
        patient_id=parse_id(patient_id, "patient_id") if patient_id else None,
        name=details["name"].strip(),
        value=value,
        unit=details.get("unit") or "",
        reference_min=reference_min,
        reference_max=reference_max,
        status=classify_result(value, reference_min, reference_max),
        date=parse_date(details["date"]).isoformat(),
        recorded_at=utc_now(),
    )
    db.add(result)
    db.flush()
    return serialize_test_result(result)


def get_test_result_names(db: Session) -> list:
    """Distinct test names, in the order each was first recorded."""
    names = []
    for (name,) in db.query(TestResult.name).order_by(TestResult.id).all():
        if name not in names:
            names.append(name)
    return names


def get_test_result_history(db: Session, test_name: str) -> list:
    results = db.query(TestResult).filter(
        TestResult.name == test_name
    ).order_by(TestResult.date, TestResult.id).all()
    return [serialize_test_result(r) for r in results]
