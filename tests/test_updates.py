import pytest

from app.exceptions import NotFoundError, ValidationError


def test_create_update(store):
    update = store.create_patient_update(1, "  Slept badly, mild nausea.  ", mood="tired", symptoms=["nausea"])

    assert update["id"] == 3
    assert update["text"] == "Slept badly, mild nausea."
    assert update["mood"] == "tired"
    assert update["symptoms"] == ["nausea"]
    assert update["replies"] == []
    assert update["recorded_at"]


@pytest.mark.parametrize("patient_id, text", [(None, "hello"), (1, None), (1, "   "), ("", "hello")])
def test_create_update_requires_patient_and_text(store, patient_id, text):
    with pytest.raises(ValidationError):
        store.create_patient_update(patient_id, text)


def test_create_update_unknown_patient(store):
    with pytest.raises(NotFoundError):
        store.create_patient_update(99, "hello")


def test_patient_updates_are_chronological(store):
    created = store.create_patient_update(1, "Feeling fine today.")

    updates = store.get_patient_updates(1)

    assert [u["id"] for u in updates] == [1, 2, created["id"]]
    assert updates[0]["replies"][0]["doctor_name"] == "Dr. Sarah Chen"
    assert updates[1]["symptoms"] == ["headache"]


def test_patient_without_updates(store, new_patient):
    assert store.get_patient_updates(new_patient["id"]) == []


def test_get_update_by_id(store):
    assert store.get_update_by_id(2)["text"].startswith("Had a mild headache")
    assert store.get_update_by_id(999) is None


def test_doctor_reply_is_attached_to_update(store):
    reply = store.add_doctor_reply(2, 1, "Keep hydrated and let me know if it returns.")

    assert reply["doctor_name"] == "Dr. Sarah Chen"
    update = store.get_update_by_id(2)
    assert update["replies"] == [reply]
    # The update itself is unchanged
    assert update["text"].startswith("Had a mild headache")


def test_doctor_reply_to_unknown_update(store):
    assert store.add_doctor_reply(999, 1, "Hello") is None


def test_doctor_reply_from_unknown_doctor(store):
    with pytest.raises(NotFoundError, match="Doctor 99"):
        store.add_doctor_reply(2, 99, "Hello")

    assert store.get_update_by_id(2)["replies"] == []


def test_doctor_reply_requires_text(store):
    with pytest.raises(ValidationError):
        store.add_doctor_reply(1, 1, " ")


def test_get_doctor_replies_for_patient(store):
    store.add_doctor_reply(2, 2, "Noted.")

    replies = store.get_doctor_replies(1)

    assert [(r["update_id"], r["doctor_name"]) for r in replies] == [
        (1, "Dr. Sarah Chen"),
        (2, "Dr. James Wilson"),
    ]
    assert store.get_doctor_replies(2) == []
