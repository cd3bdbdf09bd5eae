"""
Catch-all for /api paths the portal calls but the backend does not serve yet.
Answers with an empty collection or an empty object so the UI renders blank
panels instead of errors.
"""
from fastapi import APIRouter, Request
from app.logger import logger

router = APIRouter(tags=["Fallback"])

# Final path segments that name a collection
LIST_ENDPOINTS = frozenset({
    "patients", "doctors", "appointments", "medications",
    "summaries", "results", "records", "updates", "replies",
    "statements", "payments", "slots",
    "history", "feed", "specialties", "names", "timeline",
})


def empty_response_for(path: str):
    segments = [s for s in path.split("/") if s]
    if segments and segments[-1] in LIST_ENDPOINTS:
        return []
    return {}


@router.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def unmatched_route(path: str, request: Request):
    logger.warning(f"Unhandled API route: {request.method} /api/{path}")
    return empty_response_for(path)
