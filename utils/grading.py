import logging
from typing import Any

from models.catalog import Item, ItemType

logger = logging.getLogger(__name__)

TEXT_MATCH_TYPES = {ItemType.INPUT, ItemType.LISTEN, ItemType.GRAPH}


def normalize_answer(value: Any) -> str:
    return str(value).strip().lower()


def check_code(item: Item, response: Any) -> bool:
    source = "" if response is None else str(response)
    if item.check_tokens:
        return all(token in source for token in item.check_tokens)
    if item.lang == "javascript":
        logger.debug("No JavaScript runner; accepting non-empty code for %s", item.id)
    return bool(source)


def grade_response(item: Item, response: Any) -> bool:
    """Decide whether response answers item; item should already be personalized."""
    if item.type == ItemType.MCQ:
        if response is None:
            return False
        return str(response) in item.accepted_answers()
    if item.type in TEXT_MATCH_TYPES:
        if response is None:
            return False
        expected = {normalize_answer(answer) for answer in item.accepted_answers()}
        return normalize_answer(response) in expected
    if item.type == ItemType.CODE:
        return check_code(item, response)
    return False
