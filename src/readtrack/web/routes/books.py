"""Catalog endpoints. The catalog is read-only over HTTP."""

import structlog
from fastapi import APIRouter, Depends

from readtrack.core.record_store import RecordStore
from readtrack.web.deps import get_store
from readtrack.web.schemas import BookResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[BookResponse])
async def list_books(store: RecordStore = Depends(get_store)) -> list[BookResponse]:
    """List all catalog books."""
    books = store.list_books()
    logger.info("books_list", count=len(books))
    return [BookResponse.model_validate(b.to_dict()) for b in books]
