from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

from .state import UserProfile


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SubmitRequest(ApiModel):
    item_id: Optional[str] = Field(None, alias="itemId")
    response: Any = None
    hint_used: Optional[bool] = Field(False, alias="hintUsed")


class NextItem(ApiModel):
    id: str
    subject_id: str = Field(alias="subjectId")
    track: str
    type: str
    prompt: str
    answer: Union[str, List[str], None] = None
    choices: Optional[List[str]] = None
    hints: Optional[List[str]] = None
    data: Any = None
    due: int
    mode: str = "review"
    is_new: bool = Field(False, alias="isNew")
    is_assessment: bool = Field(False, alias="isAssessment")


class AssessmentProgress(ApiModel):
    attempts: int
    correct: int
    success_rate: int = Field(alias="successRate")
    remaining: int


class SubmitResult(ApiModel):
    correct: bool
    answer: Union[str, List[str], None] = None
    user: UserProfile
    lesson_completed: bool = Field(False, alias="lessonCompleted")
    assessment_started: bool = Field(False, alias="assessmentStarted")
    assessment_progress: Optional[AssessmentProgress] = Field(None, alias="assessmentProgress")

    def to_json(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, mode="json")
        if self.assessment_progress is None:
            payload.pop("assessmentProgress")
        return payload


class VocabularyMastery(ApiModel):
    mastered: int = 0
    total: int = 0
    percentage: int = 0
