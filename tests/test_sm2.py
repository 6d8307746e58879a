import math

from utils.sm2 import DAY_MS, MIN_EASE_FACTOR, ensure_srs, is_due, peek_srs, schedule

NOW = 1_700_000_000_000


def test_ensure_srs_creates_default_record_once():
    srs = {}
    first = ensure_srs(srs, "a::0", now=NOW)
    assert first.ease_factor == 2.5
    assert first.interval_days == 0
    assert first.reps == 0
    assert first.lapses == 0
    assert first.due == NOW
    assert first.last is None
    assert first.streak == 0

    second = ensure_srs(srs, "a::0", now=NOW + 5000)
    assert second is first
    assert second.model_dump() == first.model_dump()
    assert list(srs) == ["a::0"]


def test_peek_srs_does_not_insert():
    srs = {}
    record = peek_srs(srs, "a::0", now=NOW)
    assert record.due == NOW
    assert srs == {}


def test_correct_answers_follow_one_six_then_ease_growth():
    srs = {}
    first = schedule(srs, "a::0", True, now=NOW)
    assert first.reps == 1
    assert first.interval_days == 1
    assert first.due == NOW + DAY_MS

    second = schedule(srs, "a::0", True, now=NOW)
    assert second.interval_days == 6

    third = schedule(srs, "a::0", True, now=NOW)
    assert third.reps == 3
    assert third.streak == 3
    assert math.isclose(third.ease_factor, 2.8)
    assert third.interval_days == math.ceil(6 * third.ease_factor)
    assert third.last == NOW


def test_incorrect_answer_resets_reps_and_interval():
    srs = {}
    schedule(srs, "a::0", True, now=NOW)
    schedule(srs, "a::0", True, now=NOW)
    record = schedule(srs, "a::0", False, now=NOW + 10)
    assert record.reps == 0
    assert record.streak == 0
    assert record.lapses == 1
    assert record.interval_days == 0
    assert record.due == NOW + 10
    assert math.isclose(record.ease_factor, 2.7 - 0.32)


def test_ease_factor_never_drops_below_floor():
    srs = {}
    for _ in range(20):
        record = schedule(srs, "a::0", False, now=NOW)
        assert record.ease_factor >= MIN_EASE_FACTOR
    assert record.ease_factor == MIN_EASE_FACTOR

    for _ in range(20):
        record = schedule(srs, "b::0", True, now=NOW)
        assert record.ease_factor >= MIN_EASE_FACTOR


def test_record_is_due_once_its_interval_has_passed():
    srs = {}
    record = schedule(srs, "a", True, now=0)
    assert not is_due(record, now=DAY_MS - 1)
    assert is_due(record, now=DAY_MS)
