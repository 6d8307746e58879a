import math
from datetime import date
from typing import Optional

from models.catalog import Item
from models.state import SubjectProgress, UserProfile

BASE_LEVEL_XP = 100
LEVEL_XP_GROWTH = 1.25
DEFAULT_CORRECT_XP = 10
DEFAULT_CONSOLATION_XP = 2

STREAK_BADGES = {3: "3-day Streak", 7: "7-day Streak"}
FIRST_CORRECT_MILESTONE = 10
FIRST_CORRECT_BADGE = "First 10 Correct"
TRACK_BADGES = {"spoken": "Polyglot Beginner", "programming": "Coder Beginner"}


def xp_for_next_level(level: int) -> int:
    """XP needed to leave `level`; each level costs 25% more than the previous one."""
    return math.floor(BASE_LEVEL_XP * LEVEL_XP_GROWTH ** (level - 1))


def award_badge(user: UserProfile, name: str) -> bool:
    if name in user.badges:
        return False
    user.badges.append(name)
    return True


def add_xp(user: UserProfile, amount: int) -> int:
    """Add XP, rolling over into as many level-ups as it pays for. Returns levels gained."""
    user.xp += amount
    gained = 0
    threshold = xp_for_next_level(user.level)
    while user.xp >= threshold:
        user.xp -= threshold
        user.level += 1
        gained += 1
        award_badge(user, f"Level {user.level}")
        threshold = xp_for_next_level(user.level)
    return gained


def _parse_active_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def update_streak(user: UserProfile, today: Optional[date] = None) -> int:
    today = today or date.today()
    last = _parse_active_date(user.last_active_date)
    if last is None:
        user.streak = 1
    else:
        gap = (today - last).days
        if gap == 1:
            user.streak += 1
            badge = STREAK_BADGES.get(user.streak)
            if badge:
                award_badge(user, badge)
        elif gap > 1:
            user.streak = 1
    user.last_active_date = today.isoformat()
    return user.streak


def apply_answer_rewards(
    user: UserProfile,
    item: Item,
    progress: SubjectProgress,
    correct: bool,
    hint_used: bool,
    correct_xp: int = DEFAULT_CORRECT_XP,
    consolation_xp: int = DEFAULT_CONSOLATION_XP,
) -> int:
    """Grant XP and milestone badges for one answer. Hinted answers earn nothing."""
    if hint_used:
        return 0
    if not correct:
        add_xp(user, consolation_xp)
        return consolation_xp
    add_xp(user, correct_xp)
    if progress.correct == FIRST_CORRECT_MILESTONE:
        award_badge(user, FIRST_CORRECT_BADGE)
    track_badge = TRACK_BADGES.get(item.track)
    if track_badge:
        award_badge(user, track_badge)
    return correct_xp
