"""Load lesson and subject definitions from JSON files into a Catalog.

Two file shapes are understood:

* a flat subject: ``{"id", "title", "track", "items": [...]}``
* a structured course: ``{"id", "title", "track", "lessons": [{"id", "title", "items": [...]}]}``

Every lesson of a course becomes its own Subject. A file that cannot be read
is skipped and never stops the rest of the load; an item that does not
validate is dropped on its own and its siblings still load.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from models.catalog import Catalog, Item, Subject

logger = logging.getLogger(__name__)

DEFAULT_TRACK = "misc"


def namespaced_id(parent_id: str, raw_id: Any, ordinal: int) -> str:
    return f"{parent_id}::{raw_id or ordinal}"


def _build_items(
    subject_id: str,
    raw_items: List[Dict[str, Any]],
    track: str,
    lesson_number: Optional[int] = None,
) -> List[Item]:
    items: List[Item] = []
    for ordinal, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            logger.warning("Skipping item %d of %s: not an object", ordinal, subject_id)
            continue
        item_id = namespaced_id(subject_id, raw.get("id"), ordinal)
        payload = dict(raw)
        payload.update(
            id=item_id,
            subjectId=subject_id,
            track=track,
            lessonNumber=lesson_number,
            ordinal=ordinal,
        )
        try:
            items.append(Item.model_validate(payload))
        except ValidationError as exc:
            logger.warning("Skipping item %s: %s", item_id, exc)
    return items


def parse_course(content: Dict[str, Any], stem: str) -> Tuple[List[Subject], List[Item]]:
    course_id = content.get("id") or stem
    track = content.get("track") or DEFAULT_TRACK
    subjects: List[Subject] = []
    items: List[Item] = []
    for index, lesson in enumerate(content["lessons"]):
        if not isinstance(lesson, dict):
            raise ValueError(f"lesson {index} of {course_id} is not an object")
        lesson_number = index + 1
        lesson_id = f"{course_id}::{lesson.get('id') or lesson_number}"
        raw_items = lesson.get("items") if isinstance(lesson.get("items"), list) else []
        lesson_items = _build_items(lesson_id, raw_items, track, lesson_number)
        subjects.append(
            Subject(
                id=lesson_id,
                title=f"{content.get('title', course_id)} - {lesson.get('title', lesson_id)}",
                track=track,
                description=lesson.get("grammar") or content.get("description") or "",
                langFrom=content.get("langFrom"),
                langTo=content.get("langTo"),
                count=len(lesson_items),
                courseId=course_id,
                lessonNumber=lesson_number,
                vocabulary=lesson.get("vocabulary") or [],
                grammar=lesson.get("grammar") or "",
            )
        )
        items.extend(lesson_items)
    return subjects, items


def parse_flat_subject(content: Dict[str, Any], stem: str) -> Tuple[List[Subject], List[Item]]:
    subject_id = content.get("id") or stem
    track = content.get("track") or DEFAULT_TRACK
    raw_items = content.get("items") if isinstance(content.get("items"), list) else []
    subject_items = _build_items(subject_id, raw_items, track)
    subject = Subject(
        id=subject_id,
        title=content.get("title") or subject_id,
        track=track,
        description=content.get("description") or "",
        langFrom=content.get("langFrom"),
        langTo=content.get("langTo"),
        count=len(subject_items),
    )
    return [subject], subject_items


def parse_content_file(path: Path) -> Tuple[List[Subject], List[Item]]:
    content = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(content, dict):
        raise ValueError("top-level value must be an object")
    if isinstance(content.get("lessons"), list):
        return parse_course(content, path.stem)
    return parse_flat_subject(content, path.stem)


def load_catalog(content_dir: Path) -> Catalog:
    """Read every *.json file in content_dir; malformed files are logged and skipped."""
    subjects: Dict[str, Subject] = {}
    items: Dict[str, Item] = {}
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        logger.warning("Content directory %s does not exist", content_dir)
        return Catalog()
    for path in sorted(content_dir.glob("*.json")):
        try:
            file_subjects, file_items = parse_content_file(path)
        except (OSError, ValueError, KeyError, ValidationError) as exc:
            logger.warning("Skipping content file %s: %s", path.name, exc)
            continue
        for subject in file_subjects:
            subjects[subject.id] = subject
        for item in file_items:
            items[item.id] = item
    logger.info("Loaded %d subjects and %d items from %s", len(subjects), len(items), content_dir)
    return Catalog(subjects=subjects, items=items)
