"""Leaderboard endpoint."""

from fastapi import APIRouter, Depends

from readtrack.core.leaderboard import rank_students
from readtrack.core.record_store import RecordStore
from readtrack.web.deps import get_store
from readtrack.web.schemas import LeaderboardEntryResponse

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    store: RecordStore = Depends(get_store),
) -> list[LeaderboardEntryResponse]:
    """Students ranked by total pages read."""
    entries = rank_students(store.list_users())
    return [LeaderboardEntryResponse.model_validate(e.to_dict()) for e in entries]
