from fastapi import APIRouter, Depends

from config import get_config_value
from db.content import ContentCache, get_content
from db.store import StateStore, get_store
from utils.lessons import is_lesson_completed, is_lesson_unlocked

router = APIRouter()


@router.get("/catalog")
async def catalog(content: ContentCache = Depends(get_content), store: StateStore = Depends(get_store)):
    """Reload content from disk and list subjects with their unlock state."""
    refreshed = content.refresh()
    state = store.snapshot()
    subjects = []
    for subject in refreshed.subjects.values():
        entry = subject.model_dump(by_alias=True, exclude_none=True)
        if subject.course_id:
            entry["unlocked"] = is_lesson_unlocked(state, subject.course_id, subject.lesson_number)
            entry["completed"] = is_lesson_completed(state, subject.course_id, subject.lesson_number)
        subjects.append(entry)
    return {"subjects": subjects}


@router.get("/env")
async def env():
    return {"env": get_config_value("server", "env", "production")}
