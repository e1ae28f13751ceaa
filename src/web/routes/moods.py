"""Mood logging, history and deletion routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from moods.actions import delete_all_moods, delete_mood, log_mood
from moods.dates import day_of
from moods.definitions import get_definition
from moods.models import MoodEntry
from moods.presentation import style_for
from moods.storage import MoodStore, MoodStoreError
from web.auth import get_current_user
from web.deps import get_config, get_db_path, get_mood_store
from web.models import ActionResponse, MoodCreate, MoodEntryOut
from web.user_store import log_event

logger = structlog.get_logger()

router = APIRouter(prefix="/api/moods", tags=["moods"])


def _entry_out(entry: MoodEntry) -> MoodEntryOut:
    definition = get_definition(entry.mood)
    style = style_for(entry.mood)
    return MoodEntryOut(
        id=entry.id,
        mood=entry.mood.value,
        label=definition.label,
        score=definition.score,
        icon=style["icon"],
        color=style["color"],
        notes=entry.notes,
        date=day_of(entry.timestamp).isoformat(),
        timestamp=entry.timestamp.isoformat(),
        created_at=entry.created_at.isoformat(),
    )


@router.post("", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
async def create_mood(
    body: MoodCreate,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    result = log_mood(
        store,
        user["id"],
        body.mood,
        body.notes,
        body.date,
        notes_max_chars=get_config().moods.notes_max_chars,
    )
    if not result.success:
        raise HTTPException(status_code=500 if result.store_error else 400, detail=result.error)
    log_event("mood_logged", user["id"], get_db_path())
    return ActionResponse(success=True, message=result.message, entry_id=result.entry_id)


@router.get("", response_model=list[MoodEntryOut])
async def list_moods(
    limit: int | None = Query(None, ge=1, le=500),
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    try:
        entries = store.list_recent(user["id"], limit=limit or get_config().moods.history_limit)
    except MoodStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [_entry_out(e) for e in entries]


@router.get("/{entry_id}", response_model=MoodEntryOut)
async def get_one(
    entry_id: str,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    try:
        entry = store.get(entry_id, user["id"])
    except MoodStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=404, detail="Mood entry not found.")
    return _entry_out(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_one(
    entry_id: str,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    result = delete_mood(store, user["id"], entry_id)
    if not result.success:
        raise HTTPException(status_code=500 if result.store_error else 404, detail=result.error)


@router.delete("", response_model=ActionResponse)
async def delete_all(
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    """Account data reset: remove every mood the user logged."""
    result = delete_all_moods(store, user["id"])
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)
    log_event("moods_deleted", user["id"], get_db_path(), {"deleted": result.deleted})
    return ActionResponse(success=True, message=result.message, deleted=result.deleted)
