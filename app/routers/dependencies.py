from fastapi import Request

from app.services.clinic_store import ClinicStore


def get_store(request: Request) -> ClinicStore:
    """FastAPI dependency that hands out the store built at startup."""
    return request.app.state.store
