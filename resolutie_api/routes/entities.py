from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from resolutie_api.auth import require_owner
from resolutie_api import repositories
from resolutie_api.schemas import ENTITY_SCHEMAS, DeleteResponse, EntityListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_kind(kind: str) -> str:
    if not repositories.is_known_kind(kind):
        raise HTTPException(status_code=404, detail=f"Unknown entity kind: {kind}")
    return kind


@router.delete("/v1/progress_logs", response_model=DeleteResponse)
async def delete_progress_logs_for_day(
    habit_id: str = Query(...),
    day: date = Query(..., alias="date"),
    owner: str = Depends(require_owner),
):
    deleted = await repositories.delete_progress_logs(owner, habit_id, day.isoformat())
    return {"ok": True, "deleted": deleted}


@router.get("/v1/{kind}", response_model=EntityListResponse)
async def list_entities(
    kind: str,
    habit_id: str | None = Query(None),
    day: date | None = Query(None, alias="date"),
    owner: str = Depends(require_owner),
):
    _require_kind(kind)
    filters = {}
    if kind == "progress_logs":
        filters = {"habit_id": habit_id, "date": day.isoformat() if day else None}
    items = await repositories.list_entities(owner, kind, filters)
    return {"items": jsonable_encoder(items)}


@router.put("/v1/{kind}/{record_id}")
async def upsert_entity(
    kind: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    owner: str = Depends(require_owner),
):
    schema = ENTITY_SCHEMAS.get(_require_kind(kind))
    try:
        record = schema.model_validate({**payload, "id": record_id})
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=jsonable_encoder(exc.errors())) from exc
    saved = await repositories.upsert_entity(owner, kind, record.model_dump(mode="json"))
    if saved is None:
        raise HTTPException(status_code=409, detail=f"{kind} record {record_id} belongs to another user")
    return jsonable_encoder(saved)


@router.delete("/v1/{kind}/{record_id}", response_model=DeleteResponse)
async def delete_entity(kind: str, record_id: str, owner: str = Depends(require_owner)):
    _require_kind(kind)
    deleted = await repositories.delete_entity(owner, kind, record_id)
    if not deleted:
        logger.info("Delete of %s %s matched no rows for %s", kind, record_id, owner)
    return {"ok": True, "deleted": deleted}
