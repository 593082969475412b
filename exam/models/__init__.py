"""Exam Models - Enums, Schemas e State."""

from .enums import ExamState, QuestionCategory, TrendSignal
from .schemas import (
    AnalyticsSummary,
    AnswerRequest,
    ExamResult,
    ExamResultResponse,
    OverallStats,
    PerformancePoint,
    Question,
    QuestionReview,
    RecentPerformance,
    Score,
    SessionQuestion,
    SessionStatusResponse,
    StartExamRequest,
    WeakArea,
)
from .state import ExamSession, HistoryLog

__all__ = [
    # Enums
    "ExamState",
    "QuestionCategory",
    "TrendSignal",
    # Schemas
    "Question",
    "Score",
    "ExamResult",
    "QuestionReview",
    "OverallStats",
    "WeakArea",
    "PerformancePoint",
    "RecentPerformance",
    "AnalyticsSummary",
    "StartExamRequest",
    "AnswerRequest",
    "SessionQuestion",
    "SessionStatusResponse",
    "ExamResultResponse",
    # State
    "ExamSession",
    "HistoryLog",
]
