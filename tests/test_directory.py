import pytest

from app.exceptions import NotFoundError, ValidationError


# ── Registration ─────────────────────────────────────


def test_register_patient_assigns_increasing_ids(store):
    existing = [p["id"] for p in store.list_patients()]

    first = store.register_patient({"name": "Jane Doe"})
    second = store.register_patient({"name": "John Roe"})

    assert first["id"] > max(existing)
    assert second["id"] > first["id"]


def test_register_patient_returns_one_time_credentials(store):
    patient = store.register_patient({"name": "Jane Doe", "email": "jane@example.com"})

    assert patient["username"] == f"patient{patient['id']}"
    assert patient["credentials"]["username"] == patient["username"]
    assert patient["credentials"]["password"]
    assert patient["email"] == "jane@example.com"
    assert "password_hash" not in patient
    assert patient["created_at"]


def test_register_patient_requires_name(store):
    with pytest.raises(ValidationError, match="name"):
        store.register_patient({"email": "nobody@example.com"})

    with pytest.raises(ValidationError):
        store.register_patient({"name": "   "})


def test_register_patient_rejects_taken_username(store):
    with pytest.raises(ValidationError, match="already taken"):
        store.register_patient({"name": "Impostor", "username": "patient1"})


def test_failed_registration_has_no_side_effect(store):
    before = len(store.list_patients())
    with pytest.raises(ValidationError):
        store.register_patient({"username": "ghost"})
    assert len(store.list_patients()) == before


def test_register_patient_rejects_overlong_password(store):
    before = len(store.list_patients())

    with pytest.raises(ValidationError, match="72 bytes"):
        store.register_patient({"name": "Long Pw", "password": "x" * 100})
    # multi-byte characters count by their encoded length
    with pytest.raises(ValidationError):
        store.register_patient({"name": "Long Pw", "password": "é" * 40})

    assert len(store.list_patients()) == before


def test_register_patient_accepts_password_at_the_limit(store):
    created = store.register_patient({"name": "Edge Case", "username": "edge", "password": "y" * 72})

    assert store.patient_login("edge", "y" * 72)["patient_id"] == created["id"]
    assert store.patient_login("edge", "y" * 100) is None


def test_get_patient_unknown_id(store):
    with pytest.raises(NotFoundError):
        store.get_patient(999)


# ── Login ────────────────────────────────────────────


def test_login_with_registered_credentials(store, new_patient):
    result = store.patient_login("jane", "s3cret!")

    assert result == {"success": True, "patient_id": new_patient["id"], "name": "Jane Doe"}


def test_login_with_seeded_demo_account(store):
    result = store.patient_login("patient1", "demo123")

    assert result["patient_id"] == 1
    assert result["name"] == "Alex Johnson"


@pytest.mark.parametrize(
    "username, password",
    [
        ("jane", "wrong"),
        ("nobody", "s3cret!"),
        ("", "s3cret!"),
        ("jane", ""),
        ("JANE", "s3cret!"),
    ],
)
def test_login_mismatch_returns_none(store, new_patient, username, password):
    assert store.patient_login(username, password) is None


# ── Doctors ──────────────────────────────────────────


def test_search_doctors_without_filters_returns_everyone(store):
    names = [d["name"] for d in store.search_doctors()]

    assert names == ["Dr. Sarah Chen", "Dr. James Wilson", "Dr. Priya Patel", "Dr. Michael Brown"]


def test_search_doctors_by_name_is_case_insensitive(store):
    doctors = store.search_doctors(query="CHEN")

    assert [d["id"] for d in doctors] == [1]
    assert doctors[0]["schedule"]["Tuesday"][0] == "09:00"


def test_search_doctors_query_matches_specialty_text(store):
    doctors = store.search_doctors(query="cardio")

    assert [d["name"] for d in doctors] == ["Dr. James Wilson"]


def test_search_doctors_by_exact_specialty(store):
    assert [d["name"] for d in store.search_doctors(specialty="Neurology")] == ["Dr. Priya Patel"]
    assert store.search_doctors(specialty="neuro") == []


def test_search_doctors_filters_combine(store):
    assert store.search_doctors(query="sarah", specialty="Cardiology") == []
    assert [d["id"] for d in store.search_doctors(query="wil", specialty="Cardiology")] == [2]


def test_search_doctors_treats_wildcards_literally(store):
    assert store.search_doctors(query="%") == []
    assert store.search_doctors(query="_") == []


def test_get_specialties_in_stable_order(store):
    assert store.get_specialties() == ["Internal Medicine", "Cardiology", "Neurology", "Orthopedics"]


def test_get_specialties_empty_store(empty_store):
    assert empty_store.get_specialties() == []


def test_get_doctor_unknown_id(store):
    with pytest.raises(NotFoundError):
        store.get_doctor(42)
