from __future__ import annotations

from fastapi import APIRouter, Depends

from resolutie_api.auth import require_owner
from resolutie_api import repositories
from resolutie_api.schemas import SnapshotResponse

router = APIRouter()


@router.get("/v1/snapshot", response_model=SnapshotResponse)
async def snapshot(owner: str = Depends(require_owner)):
    return await repositories.get_snapshot(owner)
