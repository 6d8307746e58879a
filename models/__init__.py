from .catalog import Catalog, Item, ItemType, Subject
from .state import (
    AppState,
    AssessmentState,
    LessonProgress,
    Preferences,
    SrsRecord,
    SubjectProgress,
    UserProfile,
    VocabularyRecord,
)
from .api import AssessmentProgress, NextItem, SubmitRequest, SubmitResult, VocabularyMastery

__all__ = [
    'Catalog', 'Item', 'ItemType', 'Subject',
    'AppState', 'AssessmentState', 'LessonProgress', 'Preferences', 'SrsRecord',
    'SubjectProgress', 'UserProfile', 'VocabularyRecord',
    'AssessmentProgress', 'NextItem', 'SubmitRequest', 'SubmitResult', 'VocabularyMastery',
]
