from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from db.store import StateStore, get_store
from utils.lessons import get_lesson_progress
from utils.mastery import check_vocabulary_ready_for_next_lesson, get_vocabulary_mastery

router = APIRouter()


@router.get("/lesson-progress")
async def lesson_progress(courseId: Optional[str] = None, store: StateStore = Depends(get_store)):
    """Completed and unlocked lesson numbers of a course; lesson 1 is unlocked by default."""
    if not courseId:
        raise HTTPException(status_code=400, detail="courseId required")
    state = store.snapshot()
    return {"progress": get_lesson_progress(state, courseId).to_json()}


@router.get("/vocabulary-progress")
async def vocabulary_progress(subjectId: Optional[str] = None, store: StateStore = Depends(get_store)):
    if not subjectId:
        raise HTTPException(status_code=400, detail="subjectId required")
    state = store.snapshot()
    words = state.vocabulary_progress.get(subjectId) or {}
    return {
        "mastery": get_vocabulary_mastery(state.vocabulary_progress, subjectId).model_dump(),
        "vocabulary": {word: record.to_json() for word, record in words.items()},
        "readyForNextLesson": check_vocabulary_ready_for_next_lesson(state.vocabulary_progress, subjectId),
    }
