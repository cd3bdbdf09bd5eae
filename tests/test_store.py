"""Store-level behaviour: locking, rollback and error wrapping."""
import threading

import pytest

from app.exceptions import InternalError, ValidationError
from app.services.metrics import metrics


def test_concurrent_creates_get_unique_ids(store):
    created = []
    errors = []

    def worker(n):
        try:
            for i in range(10):
                created.append(store.create_patient_update(1, f"update {n}-{i}")["id"])
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(created) == 80
    assert len(set(created)) == 80
    assert len(store.get_patient_updates(1)) == 82


def test_ids_are_not_reused_after_cancellation(store):
    first = store.book_appointment({"patient_id": 1, "doctor_id": 1, "date": "2025-06-10", "time": "09:00"})
    store.cancel_appointment(first["id"])
    second = store.book_appointment({"patient_id": 1, "doctor_id": 1, "date": "2025-06-10", "time": "09:00"})

    assert second["id"] == first["id"] + 1
    assert len(store.get_appointments(1)) == 4


def test_validation_errors_are_counted(store):
    before = metrics.snapshot()["counters"].get("store.save_summary.errors", 0)

    with pytest.raises(ValidationError):
        store.save_summary({})

    assert metrics.snapshot()["counters"]["store.save_summary.errors"] == before + 1


def test_unexpected_failure_is_wrapped_and_rolled_back(store):
    def explode(db):
        from app.models import Summary
        db.add(Summary(patient_name="x", summary="y", filename="z", created_at="now"))
        db.flush()
        raise RuntimeError("boom")

    with pytest.raises(InternalError) as exc_info:
        store._run(explode)

    assert "boom" not in exc_info.value.message
    assert len(store.get_summaries()) == 1


def test_session_rolls_back_on_error(store):
    with pytest.raises(ValidationError):
        store.book_appointment({"patient_id": 1, "doctor_id": 1, "date": "2025-06-10", "time": "23:00"})

    assert all(s["available"] for s in store.get_available_slots(1, "2025-06-10"))
