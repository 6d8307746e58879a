"""Adapt an item's text to the learner's profile before it is shown or graded.

Personalization is a pure function: it returns a copy and never touches the
catalog's items.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union

from models.catalog import Item
from models.state import UserProfile

DEFAULT_PLAYER_NAME = "Player 1"
NAME_PLACEHOLDER_RE = re.compile(r"\{\{\s*user\.(?:name|displayName)\s*\}\}")
GENDER_HINT = "Use masculine/feminine forms based on your gender"

# (masculine, feminine) word forms swapped to match the learner's gender
GENDERED_FORMS: List[Tuple[str, str]] = [
    ("brasileiro", "brasileira"),
    ("obrigado", "obrigada"),
    ("cansado", "cansada"),
    ("said by a man", "said by a woman"),
    ("I am Brazilian (male)", "I am Brazilian (female)"),
]


def player_name(user: UserProfile) -> str:
    return user.display_name or user.name or DEFAULT_PLAYER_NAME


def replace_placeholders(text: str, user: UserProfile) -> str:
    name = player_name(user)
    return NAME_PLACEHOLDER_RE.sub(lambda _: name, text)


def _match_case(found: str, target: str) -> str:
    if found.isupper() and len(found) > 1:
        return target.upper()
    if found[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _swap_forms(text: str, gender: str) -> str:
    for masculine, feminine in GENDERED_FORMS:
        source, target = (feminine, masculine) if gender == "male" else (masculine, feminine)
        text = re.sub(
            re.escape(source),
            lambda match, target=target: _match_case(match.group(0), target),
            text,
            flags=re.IGNORECASE,
        )
    return text


def has_gendered_forms(text: str) -> bool:
    lowered = text.lower()
    return any(m.lower() in lowered or f.lower() in lowered for m, f in GENDERED_FORMS)


def personalize_text(text: str, user: UserProfile) -> str:
    text = replace_placeholders(text, user)
    if user.gender in ("male", "female"):
        text = _swap_forms(text, user.gender)
    return text


def personalize_answer(
    answer: Union[str, List[str], None], user: UserProfile
) -> Union[str, List[str], None]:
    if isinstance(answer, list):
        return [personalize_text(value, user) for value in answer]
    if isinstance(answer, str):
        return personalize_text(answer, user)
    return answer


def personalize_item(item: Item, user: Optional[UserProfile]) -> Item:
    """Return a copy of item with name placeholders and gendered forms resolved for user."""
    if user is None:
        return item
    hints = list(item.hints) if item.hints else None
    choices = [personalize_text(choice, user) for choice in item.choices] if item.choices else item.choices
    if user.gender not in ("male", "female") and has_gendered_forms(item.prompt):
        hints = (hints or []) + [GENDER_HINT]
    return item.model_copy(
        update={
            "prompt": personalize_text(item.prompt, user),
            "answer": personalize_answer(item.answer, user),
            "choices": choices,
            "hints": [personalize_text(hint, user) for hint in hints] if hints else hints,
        }
    )
