import json
from sqlalchemy.orm import Session
from app.exceptions import ValidationError
from app.logger import logger
from app.models import ConsultConfig
from app.tools.validation import utc_now

DEFAULT_CONFIG_NAME = "Custom Consultation"
DEFAULT_CONFIG_TYPE = "custom"
DEFAULT_CONFIG_FIELDS = ["Chief Complaint", "Assessment", "Plan"]

# Sections a consult template can be built from
CONSULT_FIELDS = [
    {"name": "Chief Complaint", "description": "The primary reason for the patient's visit", "required": True},
    {"name": "History of Present Illness", "description": "Detailed history of the current medical concern", "required": True},
    {"name": "Past Medical History", "description": "Previous medical conditions, surgeries, hospitalizations", "required": False},
    {"name": "Family History", "description": "Relevant family medical history", "required": False},
    {"name": "Social History", "description": "Lifestyle factors including smoking, alcohol, exercise", "required": False},
    {"name": "Review of Systems", "description": "Systematic review of body systems", "required": False},
    {"name": "Physical Examination", "description": "Findings from the physical exam", "required": True},
    {"name": "Assessment", "description": "Clinical assessment and diagnosis", "required": True},
    {"name": "Plan", "description": "Treatment plan and follow-up instructions", "required": True},
    {"name": "Current Medications", "description": "List of current medications", "required": False},
    {"name": "Allergies", "description": "Known allergies and reactions", "required": False},
    {"name": "Vital Signs", "description": "Blood pressure, heart rate, temperature, etc.", "required": False},
]


def serialize_consult_config(config: ConsultConfig) -> dict:
    return {
        "id": config.id,
        "name": config.name,
        "type": config.type,
        "fields": json.loads(config.fields),
        "is_default": config.is_default,
        "created_at": config.created_at,
    }


def get_consult_configs(db: Session) -> list:
    configs = db.query(ConsultConfig).order_by(ConsultConfig.id).all()
    return [serialize_consult_config(c) for c in configs]


def create_consult_config(db: Session, details: dict) -> dict:
    """Append a custom consult template. Missing name, type or fields fall back to defaults."""
    fields = details.get("fields") or DEFAULT_CONFIG_FIELDS
    if not isinstance(fields, list) or not all(isinstance(f, str) and f.strip() for f in fields):
        raise ValidationError("fields must be a list of section names")
    for key in ("name", "type"):
        if details.get(key) is not None and not isinstance(details[key], str):
            raise ValidationError(f"{key} must be a string")

    config = ConsultConfig(
        name=(details.get("name") or DEFAULT_CONFIG_NAME).strip(),
        type=(details.get("type") or DEFAULT_CONFIG_TYPE).strip(),
        fields=json.dumps([f.strip() for f in fields]),
        is_default=False,
        created_at=utc_now(),
    )
    db.add(config)
    db.flush()

    logger.info(f"🩺 Consult config #{config.id} created ({config.type})")
    return serialize_consult_config(config)


def get_default_fields() -> dict:
    return {"fields": [dict(field) for field in CONSULT_FIELDS]}
