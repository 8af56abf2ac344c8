from datetime import datetime, timezone

from fastapi import APIRouter

from app.schemas.user import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health():
    return {"status": True, "message": "API is running", "timestamp": datetime.now(tz=timezone.utc).isoformat()}
