"""Pick the next item to present for a subject.

Rules are tried in order and the first one that yields an item wins:

1. an active final assessment overrides the requested mode and draws a random
   item, preferring items that were already reviewed;
2. ``learn`` returns the first unseen item in catalog order;
3. ``practice`` returns the least recently answered item with 0 < reps < 3;
4. everything else (``review`` and the fall-through of 2 and 3) returns the
   earliest due item, then the first unseen item, then the item due soonest.

Selection never writes to the state; items without a review record are judged
against a default record that is due now.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from models.catalog import Catalog, Item
from models.state import AppState, SrsRecord
from utils.sm2 import is_due, now_ms, peek_srs

MODE_LEARN = "learn"
MODE_PRACTICE = "practice"
MODE_REVIEW = "review"
MODE_ASSESSMENT = "assessment"
PRACTICE_MAX_REPS = 3


@dataclass(frozen=True)
class Selection:
    item: Item
    mode: str = MODE_REVIEW
    is_new: bool = False
    is_assessment: bool = False


def _is_unseen(state: AppState, item: Item) -> bool:
    record = state.srs.get(item.id)
    return record is None or record.is_unseen


def _with_records(state: AppState, pool: List[Item], now: int) -> List[Tuple[Item, SrsRecord]]:
    return [(item, peek_srs(state.srs, item.id, now)) for item in pool]


def select_assessment_item(state: AppState, pool: List[Item], rng: random.Random) -> Selection:
    reviewed = [item for item in pool if item.id in state.srs and state.srs[item.id].reps > 0]
    candidates = reviewed or pool
    return Selection(item=rng.choice(candidates), mode=MODE_ASSESSMENT, is_assessment=True)


def select_learn_item(state: AppState, pool: List[Item]) -> Optional[Selection]:
    for item in pool:
        if _is_unseen(state, item):
            return Selection(item=item, mode=MODE_LEARN, is_new=True)
    return None


def select_practice_item(state: AppState, pool: List[Item], now: int) -> Optional[Selection]:
    practice = [
        (item, record)
        for item, record in _with_records(state, pool, now)
        if 0 < record.reps < PRACTICE_MAX_REPS
    ]
    if not practice:
        return None
    item, _ = min(practice, key=lambda pair: pair[1].last or 0)
    return Selection(item=item, mode=MODE_PRACTICE)


def select_review_item(state: AppState, pool: List[Item], now: int) -> Selection:
    records = _with_records(state, pool, now)
    due = [(item, record) for item, record in records if is_due(record, now)]
    if due:
        item, _ = min(due, key=lambda pair: pair[1].due)
        return Selection(item=item, mode=MODE_REVIEW)
    learn = select_learn_item(state, pool)
    if learn is not None:
        return learn
    item, _ = min(records, key=lambda pair: pair[1].due)
    return Selection(item=item, mode=MODE_REVIEW)


def get_next_item(
    state: AppState,
    catalog: Catalog,
    subject_id: str,
    mode: str = MODE_REVIEW,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> Optional[Selection]:
    """Select one item of subject_id for the requested mode, or None if it has no items."""
    pool = catalog.subject_items(subject_id)
    if not pool:
        return None
    now = now if now is not None else now_ms()

    assessment = state.assessment_state.get(subject_id)
    if assessment is not None and assessment.is_in_assessment:
        return select_assessment_item(state, pool, rng or random.Random())

    if mode == MODE_LEARN:
        selection = select_learn_item(state, pool)
        if selection is not None:
            return selection

    if mode == MODE_PRACTICE:
        selection = select_practice_item(state, pool, now)
        if selection is not None:
            return selection

    return select_review_item(state, pool, now)
