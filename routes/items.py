import random
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from config import load_config
from db.content import ContentCache, get_content
from db.store import StateStore, get_store
from models.api import AssessmentProgress, NextItem, SubmitRequest, SubmitResult
from models.catalog import Catalog
from models.state import AppState
from utils.errors import UnknownItemError
from utils.events import log_event
from utils.grading import grade_response
from utils.leveling import apply_answer_rewards, update_streak
from utils.lessons import evaluate_lesson_transitions, assessment_progress, record_assessment_answer
from utils.mastery import update_vocabulary_progress
from utils.personalize import personalize_item
from utils.progress import update_progress
from utils.selector import MODE_REVIEW, get_next_item
from utils.sm2 import now_ms, peek_srs, schedule

router = APIRouter()

# assessment draws; tests swap this for a seeded instance
rng = random.Random()


def build_next_item(
    state: AppState,
    catalog: Catalog,
    subject_id: str,
    mode: str = MODE_REVIEW,
    now: Optional[int] = None,
) -> Optional[NextItem]:
    now = now if now is not None else now_ms()
    selection = get_next_item(state, catalog, subject_id, mode, rng=rng, now=now)
    if selection is None:
        return None
    item = personalize_item(selection.item, state.user)
    return NextItem(
        id=item.id,
        subjectId=item.subject_id,
        track=item.track,
        type=item.type.value,
        prompt=item.prompt,
        answer=item.answer,
        choices=item.choices,
        hints=item.hints,
        data=item.data,
        due=peek_srs(state.srs, item.id, now).due,
        mode=selection.mode,
        isNew=selection.is_new,
        isAssessment=selection.is_assessment,
    )


def process_answer(
    state: AppState,
    catalog: Catalog,
    item_id: str,
    response,
    hint_used: bool = False,
    rewards: Optional[dict] = None,
    now: Optional[int] = None,
    today: Optional[date] = None,
) -> SubmitResult:
    """Apply one answer to the working state: grade, schedule, count, reward, gate, log."""
    stored = catalog.get_item(item_id)
    if stored is None:
        raise UnknownItemError(item_id)
    now = now if now is not None else now_ms()
    rewards = rewards or {}
    item = personalize_item(stored, state.user)
    correct = grade_response(item, response)

    schedule(state.srs, item.id, correct, now)
    progress = update_progress(state.progress, item.subject_id, correct)
    update_streak(state.user, today)
    if item.new_word:
        update_vocabulary_progress(state.vocabulary_progress, item.subject_id, item.new_word, correct, now)
    record_assessment_answer(state, item.subject_id, correct)
    apply_answer_rewards(
        state.user,
        item,
        progress,
        correct,
        bool(hint_used),
        correct_xp=rewards.get("correct_xp", 10),
        consolation_xp=rewards.get("consolation_xp", 2),
    )
    outcome = evaluate_lesson_transitions(state, catalog, item.subject_id, now)
    log_event(state.log, "answer", now=now, itemId=item.id, subjectId=item.subject_id, correct=correct)

    active = assessment_progress(state, item.subject_id)
    return SubmitResult(
        correct=correct,
        answer=item.answer,
        user=state.user,
        lessonCompleted=outcome.lesson_completed,
        assessmentStarted=outcome.assessment_started,
        assessmentProgress=AssessmentProgress(**active) if active else None,
    )


@router.get("/items/next")
async def next_item(
    subjectId: Optional[str] = None,
    mode: str = MODE_REVIEW,
    store: StateStore = Depends(get_store),
    content: ContentCache = Depends(get_content),
):
    state = store.snapshot()
    subject_id = subjectId or state.user.preferences.subject_id
    if not subject_id:
        raise HTTPException(status_code=400, detail="subjectId required")
    item = build_next_item(state, content.catalog, subject_id, mode or MODE_REVIEW)
    if item is None:
        raise HTTPException(status_code=404, detail="No items")
    return {"item": item.model_dump(by_alias=True, mode="json")}


@router.post("/submit")
async def submit_answer(
    body: SubmitRequest,
    store: StateStore = Depends(get_store),
    content: ContentCache = Depends(get_content),
):
    if not body.item_id:
        raise HTTPException(status_code=400, detail="itemId required")
    catalog = content.catalog
    if catalog.get_item(body.item_id) is None:
        raise HTTPException(status_code=404, detail="Unknown item")
    rewards = load_config()["rewards"]
    with store.transaction() as state:
        result = process_answer(state, catalog, body.item_id, body.response, body.hint_used, rewards)
    return result.to_json()
