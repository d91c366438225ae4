from .review import (
    FlashcardStats,
    ReviewGradeRequest,
    ReviewGradeResponse,
    ReviewQuality,
    ReviewRecord,
    SavedStateResponse,
)

__all__ = [
    "FlashcardStats",
    "ReviewGradeRequest",
    "ReviewGradeResponse",
    "ReviewQuality",
    "ReviewRecord",
    "SavedStateResponse",
]
