"""Lesson gating for course subjects.

A lesson moves through ``teaching -> practicing -> assessment_ready ->
in_assessment -> completed``. Transitions run once after every answer:
reaching the accuracy gate starts the final assessment, and passing the
assessment completes the lesson and unlocks the next one. A failed
assessment stays active; there is no transition back to practice.
Subjects without a course never enter the gate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.catalog import Catalog, Subject
from models.state import AppState, AssessmentState, LessonProgress
from utils.progress import percent_half_up, subject_accuracy
from utils.sm2 import now_ms

logger = logging.getLogger(__name__)

READY_ACCURACY = 0.8
ASSESSMENT_MIN_ATTEMPTS = 5
ASSESSMENT_PASS_RATE = 0.8
FIRST_LESSON = 1


class LessonState(str, Enum):
    TEACHING = "teaching"
    PRACTICING = "practicing"
    ASSESSMENT_READY = "assessment_ready"
    IN_ASSESSMENT = "in_assessment"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GateOutcome:
    assessment_started: bool = False
    lesson_completed: bool = False


def default_lesson_progress() -> LessonProgress:
    return LessonProgress(completedLessons=[], unlockedLessons=[FIRST_LESSON])


def get_lesson_progress(state: AppState, course_id: str) -> LessonProgress:
    return state.lesson_progress.get(course_id) or default_lesson_progress()


def is_lesson_unlocked(state: AppState, course_id: str, lesson_number: int) -> bool:
    if lesson_number == FIRST_LESSON:
        return True
    return lesson_number in get_lesson_progress(state, course_id).unlocked_lessons


def is_lesson_completed(state: AppState, course_id: str, lesson_number: int) -> bool:
    return lesson_number in get_lesson_progress(state, course_id).completed_lessons


def is_in_assessment(state: AppState, subject_id: str) -> bool:
    assessment = state.assessment_state.get(subject_id)
    return assessment is not None and assessment.is_in_assessment


def all_items_seen(state: AppState, catalog: Catalog, subject_id: str) -> bool:
    pool = catalog.subject_items(subject_id)
    if not pool:
        return False
    return all(item.id in state.srs and state.srs[item.id].is_seen for item in pool)


def _gated_subject(catalog: Catalog, subject_id: str) -> Optional[Subject]:
    subject = catalog.get_subject(subject_id)
    if subject is None or not subject.course_id:
        return None
    return subject


def check_lesson_ready_for_assessment(state: AppState, catalog: Catalog, subject_id: str) -> bool:
    """True when every item was seen and cumulative accuracy reached the gate."""
    if _gated_subject(catalog, subject_id) is None:
        return False
    if is_in_assessment(state, subject_id):
        return False
    if not all_items_seen(state, catalog, subject_id):
        return False
    if subject_id not in state.progress:
        return False
    item_count = len(catalog.subject_items(subject_id))
    return subject_accuracy(state.progress, subject_id, item_count) >= READY_ACCURACY


def start_lesson_assessment(state: AppState, subject_id: str, now: Optional[int] = None) -> AssessmentState:
    now = now if now is not None else now_ms()
    assessment = state.assessment_state.get(subject_id)
    if assessment is None:
        assessment = AssessmentState()
        state.assessment_state[subject_id] = assessment
    assessment.is_in_assessment = True
    assessment.assessment_attempts = 0
    assessment.assessment_correct = 0
    assessment.start_time = now
    return assessment


def record_assessment_answer(state: AppState, subject_id: str, correct: bool) -> Optional[AssessmentState]:
    """Count an answer against the active assessment, if any."""
    assessment = state.assessment_state.get(subject_id)
    if assessment is None or not assessment.is_in_assessment:
        return None
    assessment.assessment_attempts += 1
    if correct:
        assessment.assessment_correct += 1
    return assessment


def check_lesson_completion(state: AppState, catalog: Catalog, subject_id: str) -> bool:
    """Close a passed assessment. Returns True when it was passed."""
    if _gated_subject(catalog, subject_id) is None:
        return False
    assessment = state.assessment_state.get(subject_id)
    if assessment is None or not assessment.is_in_assessment:
        return False
    if assessment.assessment_attempts < ASSESSMENT_MIN_ATTEMPTS:
        return False
    if assessment.assessment_correct / assessment.assessment_attempts < ASSESSMENT_PASS_RATE:
        return False
    assessment.is_in_assessment = False
    return True


def unlock_next_lesson(state: AppState, course_id: str, lesson_number: int) -> LessonProgress:
    """Mark lesson_number completed and unlock the one after it."""
    progress = state.lesson_progress.get(course_id)
    if progress is None:
        progress = default_lesson_progress()
        state.lesson_progress[course_id] = progress
    if lesson_number not in progress.completed_lessons:
        progress.completed_lessons.append(lesson_number)
    next_lesson = lesson_number + 1
    if next_lesson not in progress.unlocked_lessons:
        progress.unlocked_lessons.append(next_lesson)
    return progress


def evaluate_lesson_transitions(
    state: AppState,
    catalog: Catalog,
    subject_id: str,
    now: Optional[int] = None,
) -> GateOutcome:
    subject = _gated_subject(catalog, subject_id)
    if subject is None:
        return GateOutcome()
    if check_lesson_ready_for_assessment(state, catalog, subject_id):
        start_lesson_assessment(state, subject_id, now)
        logger.info("Final assessment started for %s", subject_id)
        return GateOutcome(assessment_started=True)
    if check_lesson_completion(state, catalog, subject_id):
        unlock_next_lesson(state, subject.course_id, subject.lesson_number)
        logger.info(
            "Lesson %s of %s completed, lesson %s unlocked",
            subject.lesson_number,
            subject.course_id,
            subject.lesson_number + 1,
        )
        return GateOutcome(lesson_completed=True)
    return GateOutcome()


def lesson_state(state: AppState, catalog: Catalog, subject_id: str) -> LessonState:
    subject = catalog.get_subject(subject_id)
    if is_in_assessment(state, subject_id):
        return LessonState.IN_ASSESSMENT
    if subject is not None and subject.course_id and is_lesson_completed(
        state, subject.course_id, subject.lesson_number
    ):
        return LessonState.COMPLETED
    if not all_items_seen(state, catalog, subject_id):
        return LessonState.TEACHING
    item_count = len(catalog.subject_items(subject_id))
    if subject_accuracy(state.progress, subject_id, item_count) < READY_ACCURACY:
        return LessonState.PRACTICING
    return LessonState.ASSESSMENT_READY


def assessment_progress(state: AppState, subject_id: str) -> Optional[dict]:
    """Counters of the active assessment in wire shape, or None when none is active."""
    assessment = state.assessment_state.get(subject_id)
    if assessment is None or not assessment.is_in_assessment:
        return None
    attempts = assessment.assessment_attempts
    return {
        "attempts": attempts,
        "correct": assessment.assessment_correct,
        "successRate": percent_half_up(assessment.assessment_correct, attempts),
        "remaining": max(0, ASSESSMENT_MIN_ATTEMPTS - attempts),
    }
