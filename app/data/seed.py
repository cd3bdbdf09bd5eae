import json
from sqlalchemy.orm import Session
from app.logger import logger
from app.models import (
    Appointment,
    BillingRecord,
    ConsultConfig,
    Doctor,
    DoctorReply,
    MedicationEntry,
    Patient,
    Payment,
    PatientUpdate,
    Summary,
    TestResult,
)
from app.services.security import hash_password
from app.tools.records import classify_result


def seed_database(store):
    """Populate a fresh store with the demo clinic."""
    with store.session() as db:
        # Check if already seeded
        if db.query(Doctor).first():
            logger.info("Store already seeded. Skipping.")
            return
        _seed(db)
    logger.info("Store seeded with demo clinic data")


def _seed(db: Session):
    # ── Doctors ──────────────────────────────────────
    doctors = [
        Doctor(
            name="Dr. Sarah Chen",
            specialty="Internal Medicine",
            qualification="MD, Internal Medicine",
            email="sarah.chen@medease.demo",
            phone="(555) 100-0001",
            consultation_fee=150.0,
            schedule=json.dumps({
                "Monday": ["09:00", "09:30", "10:00", "10:30", "11:00", "14:00", "14:30", "15:00"],
                "Tuesday": ["09:00", "09:30", "10:00", "14:00", "14:30"],
                "Wednesday": ["09:00", "09:30", "10:00", "10:30", "11:00"],
                "Thursday": ["09:00", "10:00", "14:00", "15:00"],
                "Friday": ["09:00", "09:30", "10:00"],
            }),
        ),
        Doctor(
            name="Dr. James Wilson",
            specialty="Cardiology",
            qualification="MD, FACC",
            email="james.wilson@medease.demo",
            phone="(555) 100-0002",
            consultation_fee=250.0,
            schedule=json.dumps({
                "Monday": ["10:00", "10:30", "11:00", "14:00"],
                "Tuesday": ["09:00", "09:30", "10:00", "10:30"],
                "Wednesday": ["14:00", "14:30", "15:00", "15:30"],
                "Thursday": ["09:00", "09:30", "10:00", "14:00", "14:30"],
                "Friday": ["09:00", "10:00", "11:00"],
            }),
        ),
        Doctor(
            name="Dr. Priya Patel",
            specialty="Neurology",
            qualification="MD, PhD Neurology",
            email="priya.patel@medease.demo",
            phone="(555) 100-0003",
            consultation_fee=275.0,
            schedule=json.dumps({
                "Monday": ["09:00", "09:30", "14:00", "14:30"],
                "Tuesday": ["10:00", "10:30", "11:00"],
                "Wednesday": ["09:00", "09:30", "10:00", "14:00"],
                "Thursday": ["09:00", "10:00", "14:00", "15:00"],
                "Friday": ["09:00", "09:30", "10:00", "10:30"],
            }),
        ),
        Doctor(
            name="Dr. Michael Brown",
            specialty="Orthopedics",
            qualification="MD, Orthopaedic Surgery",
            email="michael.brown@medease.demo",
            phone="(555) 100-0004",
            consultation_fee=200.0,
            schedule=json.dumps({
                "Monday": ["09:00", "10:00", "11:00"],
                "Tuesday": ["09:00", "10:00", "14:00", "15:00"],
                "Wednesday": ["09:00", "09:30", "10:00"],
                "Thursday": ["14:00", "14:30", "15:00", "15:30"],
                "Friday": ["09:00", "10:00"],
            }),
        ),
    ]
    db.add_all(doctors)
    db.flush()

    # ── Patients ─────────────────────────────────────
    demo_hash = hash_password("demo123")
    patients = [
        Patient(
            name="Alex Johnson",
            username="patient1",
            password_hash=demo_hash,
            email="alex.johnson@demo.com",
            phone="(555) 200-0001",
            dob="1990-05-15",
            gender="Male",
            address="123 Main St, Springfield, IL 62701",
            emergency_contact="Maria Johnson",
            emergency_phone="(555) 200-0010",
            insurance_provider="BlueCross BlueShield",
            insurance_id="BCBS-2024-001",
            group_number="GRP-5001",
            created_at="2024-12-01T09:00:00+00:00",
        ),
        Patient(
            name="Emily Davis",
            username="patient2",
            password_hash=demo_hash,
            email="emily.davis@demo.com",
            phone="(555) 200-0002",
            dob="1985-11-22",
            gender="Female",
            address="456 Oak Ave, Springfield, IL 62702",
            emergency_contact="Robert Davis",
            emergency_phone="(555) 200-0020",
            insurance_provider="Aetna",
            insurance_id="AET-2024-002",
            group_number="GRP-5002",
            created_at="2024-12-02T09:00:00+00:00",
        ),
    ]
    db.add_all(patients)
    db.flush()

    alex, emily = patients
    chen, wilson = doctors[0], doctors[1]

    # ── Appointments ─────────────────────────────────
    db.add_all([
        Appointment(
            patient_id=alex.id, doctor_id=chen.id, date="2025-02-17", time="10:00",
            status="scheduled", reason="Blood pressure follow-up",
            created_at="2025-01-20T15:00:00+00:00",
        ),
        Appointment(
            patient_id=alex.id, doctor_id=wilson.id, date="2025-01-10", time="14:00",
            status="completed", reason="Cardiology consultation",
            created_at="2025-01-02T10:00:00+00:00",
        ),
        Appointment(
            patient_id=emily.id, doctor_id=chen.id, date="2025-02-19", time="09:30",
            status="scheduled", reason="Annual checkup",
            created_at="2025-01-22T11:00:00+00:00",
        ),
    ])

    # ── Billing ──────────────────────────────────────
    billing_records = [
        BillingRecord(
            patient_id=alex.id, patient_name=alex.name, service="Annual Physical Exam",
            amount=250, insurance_covered=200, patient_responsibility=50,
            status="paid", date="2025-01-15", payment_method="Credit Card",
            created_at="2025-01-15T12:00:00+00:00",
        ),
        BillingRecord(
            patient_id=alex.id, patient_name=alex.name, service="Blood Panel",
            amount=150, insurance_covered=120, patient_responsibility=30,
            status="paid", date="2025-01-15", payment_method="Credit Card",
            created_at="2025-01-15T12:05:00+00:00",
        ),
        BillingRecord(
            patient_id=alex.id, patient_name=alex.name, service="Cardiology Consultation",
            amount=350, insurance_covered=280, patient_responsibility=70,
            status="pending", date="2025-01-10",
            created_at="2025-01-10T16:00:00+00:00",
        ),
        BillingRecord(
            patient_id=emily.id, patient_name=emily.name, service="Follow-up Visit",
            amount=150, insurance_covered=120, patient_responsibility=30,
            status="pending", date="2025-01-20",
            created_at="2025-01-20T10:00:00+00:00",
        ),
    ]
    db.add_all(billing_records)
    db.flush()

    db.add_all([
        Payment(
            patient_id=rec.patient_id, billing_record_id=rec.id,
            amount=rec.patient_responsibility, method=rec.payment_method,
            date=rec.date, description=rec.service, created_at=rec.created_at,
        )
        for rec in billing_records if rec.status == "paid"
    ])

    # ── Visit summaries ──────────────────────────────
    db.add(Summary(
        patient_id=alex.id,
        patient_name=alex.name,
        filename="alex_annual_physical.pdf",
        created_at="2025-01-15T10:30:00+00:00",
        summary=(
            "## Quick Overview\n"
            "- **Patient:** Alex Johnson\n"
            "- **Visit Type:** Annual Physical Examination\n\n"
            "## What Happened\n"
            "Routine annual physical. Overall health is good. Blood pressure was "
            "slightly elevated at 135/85 and will be monitored.\n\n"
            "## Your Medications\n"
            "- **Lisinopril 10mg** - one tablet every morning\n"
            "- **Vitamin D 2000 IU** - one capsule daily\n\n"
            "## What to Do Next\n"
            "- Follow-up appointment in 3 months for blood pressure check\n"
            "- Consider dietary changes to reduce cholesterol"
        ),
    ))

    # ── Medications ──────────────────────────────────
    db.add_all([
        MedicationEntry(
            patient_id=alex.id, name="Ibuprofen 400mg", start_date="2024-03-01",
            end_date="2024-05-15", status="discontinued", recorded_at="2024-03-01T09:00:00+00:00",
        ),
        MedicationEntry(
            patient_id=alex.id, name="Lisinopril 10mg", start_date="2024-06-01",
            status="active", recorded_at="2024-06-01T09:00:00+00:00",
        ),
        MedicationEntry(
            patient_id=alex.id, name="Vitamin D 2000 IU", start_date="2024-08-15",
            status="active", recorded_at="2024-08-15T09:00:00+00:00",
        ),
    ])

    # ── Lab test results ─────────────────────────────
    lab_history = [
        ("Blood Glucose", "mg/dL", 70, 100, [("2024-07-15", 92), ("2024-10-15", 95), ("2025-01-15", 95)]),
        ("Total Cholesterol", "mg/dL", 0, 200, [("2024-07-15", 225), ("2024-10-15", 218), ("2025-01-15", 210)]),
        ("HDL Cholesterol", "mg/dL", 40, 60, [("2024-07-15", 48), ("2024-10-15", 52), ("2025-01-15", 55)]),
        ("LDL Cholesterol", "mg/dL", 0, 130, [("2024-07-15", 145), ("2024-10-15", 138), ("2025-01-15", 130)]),
        ("Blood Pressure Systolic", "mmHg", 90, 130, [("2024-07-15", 142), ("2024-10-15", 138), ("2025-01-15", 135)]),
        ("Hemoglobin A1c", "%", 4.0, 5.7, [("2024-07-15", 5.4), ("2025-01-15", 5.3)]),
    ]
    for name, unit, ref_min, ref_max, readings in lab_history:
        for date, value in readings:
            db.add(TestResult(
                patient_id=alex.id, name=name, value=value, unit=unit,
                reference_min=ref_min, reference_max=ref_max,
                status=classify_result(value, ref_min, ref_max),
                date=date, recorded_at=f"{date}T12:00:00+00:00",
            ))

    # ── Patient updates ──────────────────────────────
    first_update = PatientUpdate(
        patient_id=alex.id,
        text=(
            "I've been feeling better this week. Blood pressure readings at home have "
            "been around 128/82. Still taking my medication regularly."
        ),
        mood="good",
        recorded_at="2025-01-25T09:00:00+00:00",
    )
    second_update = PatientUpdate(
        patient_id=alex.id,
        text="Had a mild headache this morning but it went away after drinking water. No other symptoms.",
        mood="okay",
        symptoms=json.dumps(["headache"]),
        recorded_at="2025-02-01T08:15:00+00:00",
    )
    db.add_all([first_update, second_update])
    db.flush()

    db.add(DoctorReply(
        update_id=first_update.id,
        doctor_id=chen.id,
        doctor_name=chen.name,
        text="Great to hear your BP is improving! Keep monitoring and we'll review at your next visit.",
        created_at="2025-01-25T11:30:00+00:00",
    ))

    # ── Consult templates ────────────────────────────
    db.add_all([
        ConsultConfig(
            name="General Consultation", type="general", is_default=True,
            created_at="2025-01-01T00:00:00+00:00",
            fields=json.dumps([
                "Chief Complaint", "History of Present Illness", "Review of Systems",
                "Physical Examination", "Assessment", "Plan",
            ]),
        ),
        ConsultConfig(
            name="Follow-up Visit", type="follow_up", is_default=False,
            created_at="2025-01-01T00:00:00+00:00",
            fields=json.dumps([
                "Interval History", "Current Medications", "Symptom Update",
                "Assessment", "Plan Modifications",
            ]),
        ),
        ConsultConfig(
            name="New Patient Intake", type="new_patient", is_default=False,
            created_at="2025-01-01T00:00:00+00:00",
            fields=json.dumps([
                "Chief Complaint", "History of Present Illness", "Past Medical History",
                "Family History", "Social History", "Review of Systems",
                "Physical Examination", "Assessment", "Plan",
            ]),
        ),
    ])
