"""Login endpoint. Unknown university ids are registered on first login."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from readtrack.core.record_store import RecordStore
from readtrack.web.deps import get_store
from readtrack.web.schemas import LoginRequest, StudentResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=StudentResponse)
async def login(
    body: LoginRequest,
    store: RecordStore = Depends(get_store),
) -> StudentResponse:
    """Log in, creating the student if the id is new."""
    if not body.university_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="universityId is required",
        )

    record = store.create_user_if_absent(body.university_id, body.name)
    return StudentResponse.model_validate(record.to_dict())
