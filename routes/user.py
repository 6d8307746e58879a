from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from db.store import StateStore, get_store
from models.state import UserProfile
from utils.progress import get_subject_progress

router = APIRouter()


@router.get("/user")
async def get_user(store: StateStore = Depends(get_store)):
    return {"user": store.snapshot().user.to_json()}


@router.post("/user")
async def update_user(updates: Dict[str, Any] = Body(...), store: StateStore = Depends(get_store)):
    """Shallow-merge the posted fields into the profile."""
    with store.transaction() as state:
        merged = {**state.user.to_json(), **updates}
        try:
            state.user = UserProfile.model_validate(merged)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail="Invalid user profile") from exc
        user = state.user.to_json()
    return {"ok": True, "user": user}


@router.get("/stats")
async def stats(subjectId: Optional[str] = None, store: StateStore = Depends(get_store)):
    state = store.snapshot()
    subject_id = subjectId or state.user.preferences.subject_id
    progress = get_subject_progress(state.progress, subject_id).to_json() if subject_id else None
    return {
        "user": state.user.to_json(),
        "progress": progress,
        "badges": list(state.user.badges),
    }


@router.post("/reset")
async def reset(store: StateStore = Depends(get_store)):
    store.reset()
    return {"ok": True}
