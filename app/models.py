from sqlalchemy import Boolean, Column, Integer, String, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.database import Base

# Ids are never reused, even for the highest row.
AUTOINCREMENT = {"sqlite_autoincrement": True}


class Doctor(Base):
    __tablename__ = "doctors"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    specialty = Column(String(100), nullable=False, index=True)
    qualification = Column(String(200))
    email = Column(String(120))
    phone = Column(String(30))
    consultation_fee = Column(Float, default=150.0)
    schedule = Column(Text)  # JSON string: {"Monday": ["09:00", "09:30"], ...}

    appointments = relationship("Appointment", back_populates="doctor")


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(100), nullable=False)
    email = Column(String(120), default="")
    phone = Column(String(30), default="")
    dob = Column(String(10), default="")  # YYYY-MM-DD
    gender = Column(String(20), default="")
    address = Column(Text, default="")
    emergency_contact = Column(String(100), default="")
    emergency_phone = Column(String(30), default="")
    insurance_provider = Column(String(100), default="")
    insurance_id = Column(String(50), default="")
    group_number = Column(String(50), default="")
    created_at = Column(String(40), nullable=False)

    appointments = relationship("Appointment", back_populates="patient")
    billing_records = relationship("BillingRecord", back_populates="patient")
    updates = relationship("PatientUpdate", back_populates="patient")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), default="scheduled")  # scheduled, completed, cancelled
    reason = Column(String(200))
    created_at = Column(String(40), nullable=False)
    cancelled_at = Column(String(40))

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")


class BillingRecord(Base):
    __tablename__ = "billing_records"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"))
    patient_name = Column(String(100))
    service = Column(String(200), default="")
    amount = Column(Float, nullable=False)
    insurance_covered = Column(Float, default=0.0)
    patient_responsibility = Column(Float, default=0.0)
    status = Column(String(20), default="pending")  # paid, pending, outstanding, overdue
    date = Column(String(10))  # YYYY-MM-DD, date of service
    payment_method = Column(String(50))
    created_at = Column(String(40), nullable=False)

    patient = relationship("Patient", back_populates="billing_records")


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    billing_record_id = Column(Integer, ForeignKey("billing_records.id"))
    amount = Column(Float, nullable=False)
    method = Column(String(50), default="Credit Card")
    date = Column(String(10))
    description = Column(String(200))
    created_at = Column(String(40), nullable=False)


class Summary(Base):
    __tablename__ = "summaries"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"))
    patient_name = Column(String(100), nullable=False)
    summary = Column(Text, nullable=False)
    filename = Column(String(255), nullable=False)
    created_at = Column(String(40), nullable=False)


class MedicationEntry(Base):
    __tablename__ = "medications"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"))
    name = Column(String(150), nullable=False)
    start_date = Column(String(10), nullable=False)
    end_date = Column(String(10))  # null while active
    status = Column(String(20), default="active")  # active, discontinued
    recorded_at = Column(String(40), nullable=False)


class TestResult(Base):
    __tablename__ = "test_results"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"))
    name = Column(String(100), nullable=False, index=True)
    value = Column(Float, nullable=False)
    unit = Column(String(20), default="")
    reference_min = Column(Float)
    reference_max = Column(Float)
    status = Column(String(10))  # low, normal, high
    date = Column(String(10), nullable=False)
    recorded_at = Column(String(40), nullable=False)


class PatientUpdate(Base):
    __tablename__ = "patient_updates"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    text = Column(Text, nullable=False)
    mood = Column(String(30))
    symptoms = Column(Text)  # JSON list of strings
    recorded_at = Column(String(40), nullable=False)

    patient = relationship("Patient", back_populates="updates")
    replies = relationship("DoctorReply", back_populates="update", order_by="DoctorReply.id")


class DoctorReply(Base):
    __tablename__ = "doctor_replies"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    update_id = Column(Integer, ForeignKey("patient_updates.id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id"))
    doctor_name = Column(String(100))
    text = Column(Text, nullable=False)
    created_at = Column(String(40), nullable=False)

    update = relationship("PatientUpdate", back_populates="replies")


class ConsultConfig(Base):
    """Note template a doctor fills in during a consultation."""
    __tablename__ = "consult_configs"
    __table_args__ = AUTOINCREMENT

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)
    fields = Column(Text, nullable=False)  # JSON list of section names
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(String(40), nullable=False)
