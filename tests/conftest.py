import pytest

from models.catalog import Catalog, Item, Subject
from models.state import AppState

COURSE_ID = "pt"
LESSON_ONE = "pt::l1"
LESSON_TWO = "pt::l2"
STANDALONE = "trivia"


def make_items(subject_id, count, track="spoken", lesson_number=None):
    return [
        Item(
            id=f"{subject_id}::{index}",
            subjectId=subject_id,
            track=track,
            type="input",
            prompt=f"prompt {index}",
            answer=f"answer {index}",
            lessonNumber=lesson_number,
            ordinal=index,
        )
        for index in range(count)
    ]


def make_catalog():
    subjects = [
        Subject(id=LESSON_ONE, title="PT - One", track="spoken", count=5, courseId=COURSE_ID, lessonNumber=1),
        Subject(id=LESSON_TWO, title="PT - Two", track="spoken", count=2, courseId=COURSE_ID, lessonNumber=2),
        Subject(id=STANDALONE, title="Trivia", track="misc", count=3),
    ]
    items = (
        make_items(LESSON_ONE, 5, lesson_number=1)
        + make_items(LESSON_TWO, 2, lesson_number=2)
        + make_items(STANDALONE, 3, track="misc")
    )
    return Catalog(
        subjects={subject.id: subject for subject in subjects},
        items={item.id: item for item in items},
    )


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def state():
    return AppState()
