"""Exam Engines - Logica de negocios."""

from .analytics_engine import AnalyticsEngine
from .classifier import CategoryClassifier
from .sampler import QuestionSampler
from .scoring_engine import ExamScoringEngine
from .session_engine import ExamSessionEngine
from .timer import SessionTimer

__all__ = [
    "QuestionSampler",
    "ExamSessionEngine",
    "ExamScoringEngine",
    "CategoryClassifier",
    "AnalyticsEngine",
    "SessionTimer",
]
