"""Exam Module - Simulado de certificacao com analytics de desempenho.

Arquitetura:
- models/: Enums, Schemas Pydantic, ExamSession, HistoryLog
- engine/: QuestionSampler, ExamSessionEngine, ExamScoringEngine,
  CategoryClassifier, AnalyticsEngine, SessionTimer
- storage/: HistoryStore (AgentFS/KV), banco de questoes
- config.py: ExamSettings e perfis de exame
- router.py: FastAPI endpoints
"""

from .config import ExamProfile, ExamSettings
from .engine import (
    AnalyticsEngine,
    CategoryClassifier,
    ExamScoringEngine,
    ExamSessionEngine,
    QuestionSampler,
    SessionTimer,
)
from .errors import (
    EmptyPoolError,
    ExamError,
    InvalidOptionError,
    InvalidPositionError,
    InvalidStateError,
    MalformedHistoryRecordError,
    QuestionBankError,
)
from .models import ExamResult, ExamSession, ExamState, HistoryLog, Question, Score
from .storage import HistoryStore, MemoryKVStore, load_question_bank, parse_question_bank

__all__ = [
    # Config
    "ExamSettings",
    "ExamProfile",
    # Models
    "ExamState",
    "Question",
    "Score",
    "ExamResult",
    "ExamSession",
    "HistoryLog",
    # Engines
    "QuestionSampler",
    "ExamSessionEngine",
    "ExamScoringEngine",
    "CategoryClassifier",
    "AnalyticsEngine",
    "SessionTimer",
    # Storage
    "HistoryStore",
    "MemoryKVStore",
    "load_question_bank",
    "parse_question_bank",
    # Errors
    "ExamError",
    "EmptyPoolError",
    "InvalidStateError",
    "InvalidPositionError",
    "InvalidOptionError",
    "MalformedHistoryRecordError",
    "QuestionBankError",
]
