import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    CLINIC_NAME: str = os.getenv("CLINIC_NAME", "MedEase Demo Clinic")

    # Store (in-memory SQLite; contents vanish with the process)
    DATABASE_URL: str = "sqlite://"
    SEED_DEMO_DATA: bool = True

    # Clinic admin console
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")
    ADMIN_CLINIC_ID: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
