import pytest

from app.exceptions import NotFoundError, ValidationError

# 2025-06-10 is a Tuesday: Dr. Sarah Chen sees patients at these times.
TUESDAY = "2025-06-10"
CHEN_TUESDAY = ["09:00", "09:30", "10:00", "14:00", "14:30"]


def _available(slots):
    return {s["time"]: s["available"] for s in slots}


def test_slots_follow_weekday_template(store):
    slots = store.get_available_slots(1, TUESDAY)

    assert [s["time"] for s in slots] == CHEN_TUESDAY
    assert all(s["available"] for s in slots)
    assert all(s["doctor_id"] == 1 and s["date"] == TUESDAY for s in slots)


def test_slots_on_day_off_are_empty(store):
    assert store.get_available_slots(1, "2025-06-14") == []  # Saturday


def test_slots_unknown_doctor(store):
    with pytest.raises(NotFoundError):
        store.get_available_slots(99, TUESDAY)


@pytest.mark.parametrize("date", ["10/06/2025", "2025-13-01", "tomorrow", ""])
def test_slots_reject_malformed_date(store, date):
    with pytest.raises(ValidationError):
        store.get_available_slots(1, date)


def test_book_then_cancel_frees_the_slot(store, new_patient):
    assert _available(store.get_available_slots(1, TUESDAY))["09:00"] is True

    appointment = store.book_appointment({
        "patient_id": new_patient["id"],
        "doctor_id": 1,
        "date": TUESDAY,
        "time": "09:00",
    })
    assert appointment["status"] == "scheduled"
    assert appointment["reason"] == "General appointment"
    assert _available(store.get_available_slots(1, TUESDAY))["09:00"] is False
    # Other doctors are unaffected
    assert _available(store.get_available_slots(2, TUESDAY))["09:00"] is True

    result = store.cancel_appointment(appointment["id"])
    assert result["changed"] is True
    assert result["appointment"]["status"] == "cancelled"
    assert result["appointment"]["cancelled_at"]
    assert _available(store.get_available_slots(1, TUESDAY))["09:00"] is True


def test_cancelled_slot_can_be_booked_again(store, new_patient):
    details = {"patient_id": new_patient["id"], "doctor_id": 1, "date": TUESDAY, "time": "10:00"}
    first = store.book_appointment(details)
    store.cancel_appointment(first["id"])

    second = store.book_appointment(details)

    assert second["id"] > first["id"]


def test_book_rejects_taken_slot(store, new_patient):
    details = {"patient_id": new_patient["id"], "doctor_id": 1, "date": TUESDAY, "time": "09:30"}
    store.book_appointment(details)

    with pytest.raises(ValidationError, match="already booked"):
        store.book_appointment({**details, "patient_id": 1})


def test_book_rejects_time_outside_template(store, new_patient):
    with pytest.raises(ValidationError):
        store.book_appointment({
            "patient_id": new_patient["id"], "doctor_id": 1, "date": TUESDAY, "time": "11:00",
        })


def test_book_requires_fields(store):
    with pytest.raises(ValidationError, match="time"):
        store.book_appointment({"patient_id": 1, "doctor_id": 1, "date": TUESDAY})


def test_book_unknown_patient_or_doctor(store):
    with pytest.raises(NotFoundError):
        store.book_appointment({"patient_id": 99, "doctor_id": 1, "date": TUESDAY, "time": "09:00"})
    with pytest.raises(NotFoundError):
        store.book_appointment({"patient_id": 1, "doctor_id": 99, "date": TUESDAY, "time": "09:00"})


def test_second_cancellation_is_a_noop(store, new_patient):
    appointment = store.book_appointment({
        "patient_id": new_patient["id"], "doctor_id": 1, "date": TUESDAY, "time": "14:00",
    })
    first = store.cancel_appointment(appointment["id"])

    second = store.cancel_appointment(appointment["id"])

    assert second["changed"] is False
    assert second["appointment"]["status"] == "cancelled"
    assert second["appointment"]["cancelled_at"] == first["appointment"]["cancelled_at"]


def test_cancel_unknown_appointment_returns_none(store):
    assert store.cancel_appointment(999) is None


def test_cancel_other_patients_appointment_returns_none(store):
    # Appointment 3 belongs to patient 2
    assert store.cancel_appointment(3, patient_id=1) is None
    assert store.get_appointment(2, 3)["status"] == "scheduled"


def test_cancel_completed_appointment_is_rejected(store):
    with pytest.raises(ValidationError, match="completed"):
        store.cancel_appointment(2)
    assert store.get_appointment(1, 2)["status"] == "completed"


def test_get_appointments_keeps_history_in_creation_order(store):
    booked = store.book_appointment({"patient_id": 1, "doctor_id": 1, "date": TUESDAY, "time": "14:30"})
    store.cancel_appointment(booked["id"])

    appointments = store.get_appointments(1)

    assert [a["id"] for a in appointments] == [1, 2, booked["id"]]
    assert [a["status"] for a in appointments] == ["scheduled", "completed", "cancelled"]
    assert appointments[0]["doctor_name"] == "Dr. Sarah Chen"


def test_get_appointments_for_patient_without_any(store, new_patient):
    assert store.get_appointments(new_patient["id"]) == []
