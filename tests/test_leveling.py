from datetime import date

from models.catalog import Item
from models.state import SubjectProgress, UserProfile
from utils.leveling import add_xp, apply_answer_rewards, award_badge, update_streak, xp_for_next_level


def _item(track="spoken"):
    return Item(id="s::0", subjectId="s", track=track, type="input", prompt="p", answer="a")


def test_level_thresholds_grow_by_a_quarter():
    assert xp_for_next_level(1) == 100
    assert xp_for_next_level(2) == 125
    assert xp_for_next_level(3) == 156


def test_add_xp_levels_up_once_at_threshold():
    user = UserProfile()
    assert add_xp(user, 100) == 1
    assert user.level == 2
    assert user.xp == 0
    assert user.badges == ["Level 2"]


def test_add_xp_rolls_over_multiple_levels():
    user = UserProfile()
    add_xp(user, 250)
    assert user.level == 3
    assert user.xp == 25
    assert user.badges == ["Level 2", "Level 3"]


def test_badges_are_stored_once():
    user = UserProfile()
    assert award_badge(user, "Coder Beginner") is True
    assert award_badge(user, "Coder Beginner") is False
    assert user.badges == ["Coder Beginner"]


def test_hint_used_grants_nothing():
    user = UserProfile()
    assert apply_answer_rewards(user, _item(), SubjectProgress(correct=1, attempts=1), True, True) == 0
    assert user.xp == 0
    assert user.badges == []


def test_correct_and_consolation_rewards():
    user = UserProfile()
    apply_answer_rewards(user, _item("programming"), SubjectProgress(correct=1, attempts=1), True, False)
    assert user.xp == 10
    assert "Coder Beginner" in user.badges
    apply_answer_rewards(user, _item(), SubjectProgress(correct=1, attempts=2), False, False)
    assert user.xp == 12
    assert "Polyglot Beginner" not in user.badges


def test_first_ten_correct_badge():
    user = UserProfile()
    apply_answer_rewards(user, _item("misc"), SubjectProgress(correct=10, attempts=12), True, False)
    assert "First 10 Correct" in user.badges


def test_streak_counts_consecutive_days():
    user = UserProfile()
    assert update_streak(user, date(2024, 3, 1)) == 1
    assert update_streak(user, date(2024, 3, 1)) == 1
    assert update_streak(user, date(2024, 3, 2)) == 2
    assert update_streak(user, date(2024, 3, 3)) == 3
    assert "3-day Streak" in user.badges
    assert update_streak(user, date(2024, 3, 6)) == 1
    assert user.last_active_date == "2024-03-06"
