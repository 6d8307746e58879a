import math
import time
from typing import Dict, Optional

from models.state import DEFAULT_EASE_FACTOR, SrsRecord

MIN_EASE_FACTOR = 1.3
CORRECT_QUALITY = 5
INCORRECT_QUALITY = 2
DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def map_correct_to_quality(correct: bool) -> int:
    """Collapse a right/wrong answer to an SM-2 quality score (0-5)."""
    return CORRECT_QUALITY if correct else INCORRECT_QUALITY


def update_ease_factor(ease_factor: float, quality: int) -> float:
    return max(MIN_EASE_FACTOR, ease_factor - 0.8 + 0.28 * quality - 0.02 * quality * quality)


def default_srs(now: Optional[int] = None) -> SrsRecord:
    return SrsRecord(
        EF=DEFAULT_EASE_FACTOR,
        intervalDays=0,
        reps=0,
        lapses=0,
        due=now if now is not None else now_ms(),
        last=None,
        streak=0,
    )


def ensure_srs(srs: Dict[str, SrsRecord], item_id: str, now: Optional[int] = None) -> SrsRecord:
    """Return the review record for item_id, inserting the default one if absent."""
    record = srs.get(item_id)
    if record is None:
        record = default_srs(now)
        srs[item_id] = record
    return record


def peek_srs(srs: Dict[str, SrsRecord], item_id: str, now: Optional[int] = None) -> SrsRecord:
    """Like ensure_srs, but never inserts; unknown items get a detached default record."""
    record = srs.get(item_id)
    if record is None:
        return default_srs(now)
    return record


def update_sm2(record: SrsRecord, correct: bool, now: Optional[int] = None) -> SrsRecord:
    """Apply one answer to a review record in place and compute its new due time."""
    now = now if now is not None else now_ms()
    quality = map_correct_to_quality(correct)
    record.ease_factor = update_ease_factor(record.ease_factor, quality)
    if correct:
        record.reps += 1
        record.streak += 1
        if record.reps == 1:
            record.interval_days = 1
        elif record.reps == 2:
            record.interval_days = 6
        else:
            record.interval_days = math.ceil(record.interval_days * record.ease_factor)
    else:
        record.reps = 0
        record.lapses += 1
        record.streak = 0
        record.interval_days = 0  # immediate re-review
    record.last = now
    record.due = now + record.interval_days * DAY_MS
    return record


def schedule(srs: Dict[str, SrsRecord], item_id: str, correct: bool, now: Optional[int] = None) -> SrsRecord:
    now = now if now is not None else now_ms()
    record = ensure_srs(srs, item_id, now)
    return update_sm2(record, correct, now)


def is_due(record: SrsRecord, now: Optional[int] = None) -> bool:
    now = now if now is not None else now_ms()
    return record.due <= now
