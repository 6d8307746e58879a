from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional, Union
from enum import Enum


class ItemType(str, Enum):
    MCQ = "mcq"
    INPUT = "input"
    LISTEN = "listen"
    CODE = "code"
    GRAPH = "graph"


class Subject(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    track: str = "misc"
    description: str = ""
    lang_from: Optional[str] = Field(None, alias="langFrom")
    lang_to: Optional[str] = Field(None, alias="langTo")
    count: int = 0
    course_id: Optional[str] = Field(None, alias="courseId")
    lesson_number: Optional[int] = Field(None, alias="lessonNumber")
    vocabulary: List[Any] = Field(default_factory=list)
    grammar: str = ""


class Item(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    subject_id: str = Field(alias="subjectId")
    track: str = "misc"
    type: ItemType
    prompt: str = ""
    answer: Union[str, List[str], None] = None
    choices: Optional[List[str]] = None
    hints: Optional[List[str]] = None
    data: Any = None
    new_word: Optional[str] = Field(None, alias="newWord")
    lang: Optional[str] = None
    check_tokens: Optional[List[str]] = Field(None, alias="checkTokens")
    lesson_number: Optional[int] = Field(None, alias="lessonNumber")
    ordinal: int = 0

    @field_validator("answer", "choices", "hints", mode="before")
    @classmethod
    def _stringify_scalars(cls, value):
        # authored JSON sometimes carries bare numbers ("answer": 4)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, list):
            return [str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v for v in value]
        return value

    def accepted_answers(self) -> List[str]:
        if self.answer is None:
            return []
        if isinstance(self.answer, list):
            return list(self.answer)
        return [self.answer]


class Catalog(BaseModel):
    """Subjects and items loaded from the content directory, in authoring order."""

    model_config = ConfigDict(frozen=True)

    subjects: Dict[str, Subject] = Field(default_factory=dict)
    items: Dict[str, Item] = Field(default_factory=dict)

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self.subjects.get(subject_id)

    def get_item(self, item_id: str) -> Optional[Item]:
        return self.items.get(item_id)

    def subject_items(self, subject_id: str) -> List[Item]:
        pool = [item for item in self.items.values() if item.subject_id == subject_id]
        return sorted(pool, key=lambda item: item.ordinal)
