import math
from typing import Dict

from models.state import SubjectProgress


def percent_half_up(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def get_subject_progress(progress: Dict[str, SubjectProgress], subject_id: str) -> SubjectProgress:
    return progress.get(subject_id) or SubjectProgress()


def update_progress(progress: Dict[str, SubjectProgress], subject_id: str, correct: bool) -> SubjectProgress:
    record = progress.get(subject_id)
    if record is None:
        record = SubjectProgress()
        progress[subject_id] = record
    record.attempts += 1
    if correct:
        record.correct += 1
    return record


def subject_accuracy(progress: Dict[str, SubjectProgress], subject_id: str, item_count: int) -> float:
    """Cumulative correct answers relative to the number of items in the subject."""
    if item_count <= 0:
        return 0.0
    return get_subject_progress(progress, subject_id).correct / item_count
