import pytest

from app.exceptions import ValidationError


def test_seeded_configs(store):
    configs = store.get_consult_configs()

    assert [c["name"] for c in configs] == ["General Consultation", "Follow-up Visit", "New Patient Intake"]
    assert [c["is_default"] for c in configs] == [True, False, False]
    assert configs[1]["fields"][-1] == "Plan Modifications"
    assert len(configs[2]["fields"]) == 9


def test_empty_store_has_no_configs(empty_store):
    assert empty_store.get_consult_configs() == []


def test_create_config_with_defaults(store):
    config = store.create_consult_config({})

    assert config["id"] == 4
    assert config["name"] == "Custom Consultation"
    assert config["type"] == "custom"
    assert config["fields"] == ["Chief Complaint", "Assessment", "Plan"]
    assert config["is_default"] is False
    assert config["created_at"]
    assert store.get_consult_configs()[-1] == config


def test_create_config_keeps_given_sections(store):
    config = store.create_consult_config({
        "name": "Cardiac Review", "type": "cardiology", "fields": ["Vital Signs", "Assessment"],
    })

    assert (config["name"], config["type"], config["fields"]) == ("Cardiac Review", "cardiology", ["Vital Signs", "Assessment"])


@pytest.mark.parametrize("details", [
    {"fields": "Plan"},
    {"fields": ["Plan", " "]},
    {"fields": ["Plan", 3]},
    {"name": 42},
])
def test_create_config_rejects_bad_input(store, details):
    with pytest.raises(ValidationError):
        store.create_consult_config(details)

    assert len(store.get_consult_configs()) == 3


def test_default_fields_catalogue(store):
    fields = store.get_consult_default_fields()["fields"]

    assert len(fields) == 12
    assert fields[0] == {
        "name": "Chief Complaint",
        "description": "The primary reason for the patient's visit",
        "required": True,
    }
    assert {f["name"] for f in fields if f["required"]} == {
        "Chief Complaint", "History of Present Illness", "Physical Examination", "Assessment", "Plan",
    }


def test_default_fields_are_not_shared(store):
    store.get_consult_default_fields()["fields"][0]["name"] = "changed"

    assert store.get_consult_default_fields()["fields"][0]["name"] == "Chief Complaint"
