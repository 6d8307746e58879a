from typing import Dict, Optional

from models.api import VocabularyMastery
from models.state import VocabularyRecord
from utils.progress import percent_half_up
from utils.sm2 import now_ms

MASTERY_MIN_ATTEMPTS = 3
MASTERY_MIN_ACCURACY = 0.8
DEFAULT_REQUIRED_MASTERY = 8

VocabularyTable = Dict[str, Dict[str, VocabularyRecord]]


def is_word_mastered(attempts: int, correct: int) -> bool:
    if attempts < MASTERY_MIN_ATTEMPTS:
        return False
    return correct / attempts >= MASTERY_MIN_ACCURACY


def update_vocabulary_progress(
    vocabulary: VocabularyTable,
    subject_id: str,
    word: str,
    correct: bool,
    now: Optional[int] = None,
) -> VocabularyRecord:
    # mastery is recomputed on every answer, so a word can lose it again
    now = now if now is not None else now_ms()
    words = vocabulary.setdefault(subject_id, {})
    record = words.get(word)
    if record is None:
        record = VocabularyRecord(firstSeen=now, lastSeen=now)
        words[word] = record
    record.attempts += 1
    if correct:
        record.correct += 1
    record.last_seen = now
    record.mastered = is_word_mastered(record.attempts, record.correct)
    return record


def mastery_percent(mastered: int, total: int) -> int:
    if total <= 0:
        return 0
    return percent_half_up(mastered, total)


def get_vocabulary_mastery(vocabulary: VocabularyTable, subject_id: str) -> VocabularyMastery:
    words = vocabulary.get(subject_id) or {}
    total = len(words)
    mastered = sum(1 for record in words.values() if record.mastered)
    return VocabularyMastery(mastered=mastered, total=total, percentage=mastery_percent(mastered, total))


def check_vocabulary_ready_for_next_lesson(
    vocabulary: VocabularyTable,
    subject_id: str,
    required_mastery: int = DEFAULT_REQUIRED_MASTERY,
) -> bool:
    words = vocabulary.get(subject_id) or {}
    return sum(1 for record in words.values() if record.mastered) >= required_mastery
