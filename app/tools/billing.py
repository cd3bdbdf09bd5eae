from sqlalchemy.orm import Session
from app.exceptions import ValidationError
from app.logger import logger
from app.models import BillingRecord, Payment
from app.tools.directory import load_patient
from app.tools.validation import parse_date, parse_id, parse_number, today, utc_now

BILLING_STATUSES = ("paid", "pending", "outstanding", "overdue")
DEFAULT_PAYMENT_METHOD = "Credit Card"


def serialize_billing_record(rec: BillingRecord) -> dict:
    return {
        "id": rec.id,
        "patient_id": rec.patient_id,
        "patient_name": rec.patient_name,
        "service": rec.service,
        "amount": rec.amount,
        "insurance_covered": rec.insurance_covered,
        "patient_responsibility": rec.patient_responsibility,
        "status": rec.status,
        "date": rec.date,
        "payment_method": rec.payment_method,
        "created_at": rec.created_at,
    }


def serialize_payment(payment: Payment) -> dict:
    return {
        "id": payment.id,
        "patient_id": payment.patient_id,
        "billing_record_id": payment.billing_record_id,
        "amount": payment.amount,
        "method": payment.method,
        "date": payment.date,
        "description": payment.description,
        "created_at": payment.created_at,
    }


def create_billing_record(db: Session, details: dict) -> dict:
    """Append a billing record. A record created as paid also books its payment."""
    amount = parse_number(details.get("amount"), "amount")

    status = details.get("status") or "pending"
    if status not in BILLING_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(BILLING_STATUSES)}")

    insurance_covered = parse_number(details.get("insurance_covered", 0) or 0, "insurance_covered")
    if insurance_covered > amount:
        raise ValidationError("insurance_covered cannot exceed amount")

    if details.get("patient_responsibility") is not None:
        patient_responsibility = parse_number(details["patient_responsibility"], "patient_responsibility")
    else:
        patient_responsibility = amount - insurance_covered

    patient_id = None
    patient_name = details.get("patient_name")
    if details.get("patient_id") is not None:
        patient = load_patient(db, details["patient_id"])
        patient_id = patient.id
        patient_name = patient_name or patient.name

    date = parse_date(details["date"]).isoformat() if details.get("date") else today()

    record = BillingRecord(
        patient_id=patient_id,
        patient_name=patient_name or "Unknown",
        service=details.get("service") or "",
        amount=amount,
        insurance_covered=insurance_covered,
        patient_responsibility=patient_responsibility,
        status=status,
        date=date,
        payment_method=details.get("payment_method"),
        created_at=utc_now(),
    )
    db.add(record)
    db.flush()

    if status == "paid" and patient_id is not None:
        db.add(Payment(
            patient_id=patient_id,
            billing_record_id=record.id,
            amount=patient_responsibility,
            method=record.payment_method or DEFAULT_PAYMENT_METHOD,
            date=date,
            description=record.service or "Payment",
            created_at=record.created_at,
        ))
        db.flush()

    logger.info(f"💳 Billing record #{record.id} created ({status}, {amount:.2f})")
    return serialize_billing_record(record)


def get_billing_records(db: Session, patient_id=None) -> list:
    records = db.query(BillingRecord)
    if patient_id is not None:
        records = records.filter(BillingRecord.patient_id == parse_id(patient_id, "patient_id"))
    return [serialize_billing_record(rec) for rec in records.order_by(BillingRecord.id).all()]


def get_billing_summary(db: Session) -> dict:
    """Aggregate figures over the whole ledger, recomputed on every call."""
    total_billed = 0.0
    insurance_covered = 0.0
    total_paid = 0.0
    outstanding = 0.0
    counts_by_status = {status: 0 for status in BILLING_STATUSES}
    monthly_totals = {}

    records = db.query(BillingRecord).order_by(BillingRecord.id).all()
    for rec in records:
        total_billed += rec.amount
        insurance_covered += rec.insurance_covered or 0
        counts_by_status[rec.status] = counts_by_status.get(rec.status, 0) + 1
        if rec.status == "paid":
            total_paid += rec.patient_responsibility or 0
        else:
            outstanding += rec.patient_responsibility or 0
        month = (rec.date or rec.created_at)[:7]
        monthly_totals[month] = monthly_totals.get(month, 0.0) + rec.amount

    return {
        "total_billed": total_billed,
        "insurance_covered": insurance_covered,
        "total_paid": total_paid,
        "outstanding": outstanding,
        "pending_count": counts_by_status["pending"],
        "record_count": len(records),
        "counts_by_status": counts_by_status,
        "monthly_totals": [
            {"month": month, "amount": monthly_totals[month]}
            for month in sorted(monthly_totals)
        ],
    }


def record_payment(db: Session, patient_id, details: dict) -> dict:
    """Append a patient payment that is not tied to a specific bill."""
    patient = load_patient(db, patient_id)
    amount = parse_number(details.get("amount"), "amount")
    if amount == 0:
        raise ValidationError("amount must be greater than zero")

    payment = Payment(
        patient_id=patient.id,
        amount=amount,
        method=details.get("method") or DEFAULT_PAYMENT_METHOD,
        date=today(),
        description=details.get("description") or "Payment",
        created_at=utc_now(),
    )
    db.add(payment)
    db.flush()

    logger.info(f"💰 Payment #{payment.id} recorded for patient #{patient.id}")
    return serialize_payment(payment)


def get_patient_payments(db: Session, patient_id) -> list:
    patient_id = parse_id(patient_id, "patient_id")
    payments = db.query(Payment).filter(
        Payment.patient_id == patient_id
    ).order_by(Payment.id).all()
    return [serialize_payment(p) for p in payments]


def get_patient_statements(db: Session, patient_id) -> list:
    """One statement line per billing record, showing what the patient owes."""
    patient_id = parse_id(patient_id, "patient_id")
    records = db.query(BillingRecord).filter(
        BillingRecord.patient_id == patient_id
    ).order_by(BillingRecord.id).all()
    return [
        {
            "id": rec.id,
            "date": rec.date,
            "description": rec.service,
            "amount": rec.patient_responsibility,
            "status": rec.status,
        }
        for rec in records
    ]
