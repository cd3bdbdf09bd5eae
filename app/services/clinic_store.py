"""
Clinic operations store.

One instance is built at process start and handed to every caller. It owns
the in-memory tables and runs each operation under a single lock on its own
session: committed on success, rolled back on any error. Ids therefore
never collide and readers never observe a half-applied write.
"""
import threading
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session

from app.database import create_session_factory, create_store_engine, init_db
from app.exceptions import ClinicError, InternalError
from app.logger import logger
from app.services.metrics import metrics
from app.tools import appointment, billing, consult, directory, records, updates


class ClinicStore:
    """Owns all clinic entities and answers every domain query."""

    def __init__(self, database_url: str = "sqlite://"):
        self.engine = create_store_engine(database_url)
        self._session_factory = create_session_factory(self.engine)
        self._lock = threading.Lock()
        init_db(self.engine)

    @contextmanager
    def session(self):
        """Exclusive session for bulk work such as seeding."""
        with self._lock:
            db: Session = self._session_factory()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def _run(self, operation, *args, **kwargs):
        name = operation.__name__
        metrics.increment(f"store.{name}.calls")
        with metrics.timer(f"store.{name}.ms"):
            try:
                with self.session() as db:
                    return operation(db, *args, **kwargs)
            except ClinicError:
                metrics.increment(f"store.{name}.errors")
                raise
            except Exception as e:
                metrics.increment(f"store.{name}.errors")
                logger.exception(f"❌ Store operation {name} failed")
                raise InternalError("An internal error occurred. Please try again.") from e

    def close(self):
        self.engine.dispose()

    # ── Directory ──

    def register_patient(self, details: dict) -> dict:
        return self._run(directory.register_patient, details)

    def patient_login(self, username: str, password: str) -> Optional[dict]:
        return self._run(directory.patient_login, username, password)

    def get_patient(self, patient_id) -> dict:
        return self._run(directory.get_patient, patient_id)

    def list_patients(self) -> list:
        return self._run(directory.list_patients)

    def search_doctors(self, query: str = None, specialty: str = None) -> list:
        return self._run(directory.search_doctors, query=query, specialty=specialty)

    def get_doctor(self, doctor_id) -> dict:
        return self._run(directory.get_doctor, doctor_id)

    def get_specialties(self) -> list:
        return self._run(directory.get_specialties)

    # ── Scheduling ──

    def get_available_slots(self, doctor_id, date: str) -> list:
        return self._run(appointment.get_available_slots, doctor_id, date)

    def book_appointment(self, details: dict) -> dict:
        return self._run(appointment.book_appointment, details)

    def get_appointments(self, patient_id) -> list:
        return self._run(appointment.get_appointments, patient_id)

    def get_appointment(self, patient_id, appointment_id) -> Optional[dict]:
        return self._run(appointment.get_appointment, patient_id, appointment_id)

    def cancel_appointment(self, appointment_id, patient_id=None) -> Optional[dict]:
        return self._run(appointment.cancel_appointment, appointment_id, patient_id=patient_id)

    # ── Billing ──

    def create_billing_record(self, details: dict) -> dict:
        return self._run(billing.create_billing_record, details)

    def get_billing_records(self, patient_id=None) -> list:
        return self._run(billing.get_billing_records, patient_id=patient_id)

    def get_billing_summary(self) -> dict:
        return self._run(billing.get_billing_summary)

    def record_payment(self, patient_id, details: dict) -> dict:
        return self._run(billing.record_payment, patient_id, details)

    def get_patient_payments(self, patient_id) -> list:
        return self._run(billing.get_patient_payments, patient_id)

    def get_patient_statements(self, patient_id) -> list:
        return self._run(billing.get_patient_statements, patient_id)

    # ── Clinical records ──

    def save_summary(self, details: dict) -> dict:
        return self._run(records.save_summary, details)

    def get_summaries(self, limit: Optional[int] = None, patient_id=None) -> list:
        return self._run(records.get_summaries, limit=limit, patient_id=patient_id)

    def record_medication(self, details: dict) -> dict:
        return self._run(records.record_medication, details)

    def get_medications_timeline(self, patient_id=None) -> list:
        return self._run(records.get_medications_timeline, patient_id=patient_id)

    def record_test_result(self, details: dict) -> dict:
        return self._run(records.record_test_result, details)

    def get_test_result_names(self) -> list:
        return self._run(records.get_test_result_names)

    def get_test_result_history(self, test_name: str) -> list:
        return self._run(records.get_test_result_history, test_name)

    # ── Patient engagement ──

    def create_patient_update(self, patient_id, text: str, mood: str = None, symptoms: list = None) -> dict:
        return self._run(updates.create_patient_update, patient_id, text, mood=mood, symptoms=symptoms)

    def get_patient_updates(self, patient_id) -> list:
        return self._run(updates.get_patient_updates, patient_id)

    def get_update_by_id(self, update_id) -> Optional[dict]:
        return self._run(updates.get_update_by_id, update_id)

    def add_doctor_reply(self, update_id, doctor_id, text: str) -> Optional[dict]:
        return self._run(updates.add_doctor_reply, update_id, doctor_id, text)

    def get_doctor_replies(self, patient_id) -> list:
        return self._run(updates.get_doctor_replies, patient_id)

    # ── Consult templates ──

    def get_consult_configs(self) -> list:
        return self._run(consult.get_consult_configs)

    def create_consult_config(self, details: dict) -> dict:
        return self._run(consult.create_consult_config, details)

    def get_consult_default_fields(self) -> dict:
        return consult.get_default_fields()
