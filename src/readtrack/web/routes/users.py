"""Student endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from readtrack.core.leaderboard import available_books, shelf_book_ids
from readtrack.core.record_store import RecordStore
from readtrack.web.deps import get_store
from readtrack.web.schemas import (
    BookResponse,
    NameUpdateRequest,
    ProgressUpdateRequest,
    StudentResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[StudentResponse])
async def list_users(store: RecordStore = Depends(get_store)) -> list[StudentResponse]:
    """List all students."""
    return [StudentResponse.model_validate(u.to_dict()) for u in store.list_users()]


@router.get("/{user_id}", response_model=StudentResponse)
async def get_user(
    user_id: str, store: RecordStore = Depends(get_store)
) -> StudentResponse:
    """Get a specific student by id."""
    record = store.find_user(user_id)
    return StudentResponse.model_validate(record.to_dict())


@router.get("/{user_id}/available-books", response_model=list[BookResponse])
async def get_available_books(
    user_id: str, store: RecordStore = Depends(get_store)
) -> list[BookResponse]:
    """Catalog books the student has not added to their shelf yet."""
    record = store.find_user(user_id)
    books = available_books(store.list_books(), shelf_book_ids(record))
    return [BookResponse.model_validate(b.to_dict()) for b in books]


@router.put("/{user_id}/progress", response_model=StudentResponse)
async def update_progress(
    user_id: str,
    body: ProgressUpdateRequest,
    store: RecordStore = Depends(get_store),
) -> StudentResponse:
    """Shallow-merge a progress update into the student's progress."""
    if body.progress is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="progress is required",
        )

    record = store.update_progress(user_id, body.progress)
    return StudentResponse.model_validate(record.to_dict())


@router.put("/{user_id}", response_model=StudentResponse)
async def update_user(
    user_id: str,
    body: NameUpdateRequest | None = None,
    store: RecordStore = Depends(get_store),
) -> StudentResponse:
    """Rename a student. An empty or missing name leaves it unchanged."""
    record = store.update_name(user_id, body.name if body else None)
    return StudentResponse.model_validate(record.to_dict())


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, store: RecordStore = Depends(get_store)
) -> Response:
    """Delete a student by id."""
    store.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
