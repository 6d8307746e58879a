from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional

DEFAULT_EASE_FACTOR = 2.5


class StateModel(BaseModel):
    """Base for persisted records; camelCase aliases are the on-disk and wire names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class SrsRecord(StateModel):
    ease_factor: float = Field(DEFAULT_EASE_FACTOR, alias="EF")
    interval_days: int = Field(0, alias="intervalDays")
    reps: int = 0
    lapses: int = 0
    due: int = 0  # epoch ms
    last: Optional[int] = None  # epoch ms
    streak: int = 0

    @property
    def is_unseen(self) -> bool:
        return self.reps == 0 and self.last is None

    @property
    def is_seen(self) -> bool:
        return self.reps > 0 or self.last is not None


class SubjectProgress(StateModel):
    correct: int = 0
    attempts: int = 0


class VocabularyRecord(StateModel):
    attempts: int = 0
    correct: int = 0
    mastered: bool = False
    first_seen: int = Field(0, alias="firstSeen")
    last_seen: int = Field(0, alias="lastSeen")


class AssessmentState(StateModel):
    is_in_assessment: bool = Field(False, alias="isInAssessment")
    assessment_attempts: int = Field(0, alias="assessmentAttempts")
    assessment_correct: int = Field(0, alias="assessmentCorrect")
    start_time: Optional[int] = Field(None, alias="startTime")


class LessonProgress(StateModel):
    completed_lessons: List[int] = Field(default_factory=list, alias="completedLessons")
    unlocked_lessons: List[int] = Field(default_factory=lambda: [1], alias="unlockedLessons")


class Preferences(StateModel):
    track: Optional[str] = None
    subject_id: Optional[str] = Field(None, alias="subjectId")


class UserProfile(StateModel):
    id: str = "local-user"
    name: str = "Player 1"
    display_name: Optional[str] = Field(None, alias="displayName")
    gender: Optional[Literal["male", "female", "neutral"]] = None
    is_profile_complete: bool = Field(False, alias="isProfileComplete")
    xp: int = 0
    level: int = 1
    streak: int = 0
    last_active_date: Optional[str] = Field(None, alias="lastActiveDate")
    badges: List[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class AppState(StateModel):
    user: UserProfile = Field(default_factory=UserProfile)
    srs: Dict[str, SrsRecord] = Field(default_factory=dict)
    progress: Dict[str, SubjectProgress] = Field(default_factory=dict)
    lesson_progress: Dict[str, LessonProgress] = Field(default_factory=dict, alias="lessonProgress")
    assessment_state: Dict[str, AssessmentState] = Field(default_factory=dict, alias="assessmentState")
    vocabulary_progress: Dict[str, Dict[str, VocabularyRecord]] = Field(
        default_factory=dict, alias="vocabularyProgress"
    )
    log: List[Dict[str, Any]] = Field(default_factory=list)
