# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Fixtures de dominio para testes unitarios sem dependencias externas
# =============================================================================

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE TEMPO
# =============================================================================


class FakeClock:
    """Relogio controlado manualmente pelos testes."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock():
    """Relogio deterministico (inicia em 2025-01-15 12:00 UTC)."""
    return FakeClock()


# =============================================================================
# FIXTURES DE DADOS DE TESTE
# =============================================================================


@pytest.fixture
def sample_question_records():
    """Registros brutos no formato do banco de questoes."""
    return [
        {
            "question": "Which process identifies threats to information assets?",
            "options": ["Risk assessment", "Management review", "Training", "Backup"],
            "correct": 0,
            "explanation": "Risk assessment identifies threats and vulnerabilities.",
        },
        {
            "question": "What does Annex A list?",
            "options": ["Security controls", "Auditors", "Certificates"],
            "correct": 0,
        },
        {
            "question": "Who approves the ISMS scope?",
            "options": ["Top management", "Suppliers"],
            "correct": 0,
        },
        {
            "question": "When are internal audits performed?",
            "options": ["Never", "At planned intervals", "Only at certification"],
            "correct": 1,
        },
        {
            "question": "Which policy must be communicated to staff?",
            "options": ["Marketing plan", "Information security policy", "Price list", "None"],
            "correct": 1,
            "explanation": "Clause 5.2 requires the policy to be communicated.",
        },
    ]


@pytest.fixture
def sample_pool(sample_question_records):
    """Banco com 5 questoes validas."""
    from exam.models.schemas import Question

    return tuple(Question.model_validate(r) for r in sample_question_records)


@pytest.fixture
def make_question():
    """Factory de questoes com texto e gabarito arbitrarios."""
    from exam.models.schemas import Question

    def _make(text: str = "What is an asset?", correct: int = 0, num_options: int = 4):
        return Question(
            text=text,
            options=[f"Option {i}" for i in range(num_options)],
            correct_index=correct,
        )

    return _make


@pytest.fixture
def make_result(make_question):
    """Factory de ExamResult para testes de analytics."""
    from exam.models.schemas import ExamResult, Score

    counter = {"n": 0}

    def _make(
        percent: int = 80,
        time_taken_seconds: int = 600,
        questions=None,
        answers=None,
        timed_out: bool = False,
    ):
        counter["n"] += 1
        questions = tuple(questions) if questions is not None else (make_question(),)
        answers = dict(answers) if answers is not None else {}
        total = len(questions)
        correct = sum(1 for i, q in enumerate(questions) if answers.get(i) == q.correct_index)
        return ExamResult(
            id=f"result-{counter['n']}",
            exam_type="iso27001",
            score=Score(correct=correct, total=total, percent=percent),
            time_taken_seconds=time_taken_seconds,
            timestamp=datetime(2025, 1, counter["n"], 10, 0, 0, tzinfo=timezone.utc),
            questions=questions,
            answers=answers,
            timed_out=timed_out,
        )

    return _make


# =============================================================================
# FIXTURES DE ENGINE
# =============================================================================


@pytest.fixture
def short_settings():
    """Settings com faixa de duracao curta (timers testaveis)."""
    from exam.config import ExamSettings

    return ExamSettings(
        num_questions=3,
        duration_seconds=60,
        min_duration_seconds=1,
        max_duration_seconds=3600,
        tick_interval=0.01,
    )


@pytest.fixture
def seeded_sampler():
    """Sampler com seed fixa."""
    from exam.engine.sampler import QuestionSampler

    return QuestionSampler(random.Random(1234))


@pytest.fixture
def engine(sample_pool, short_settings, seeded_sampler, fake_clock):
    """ExamSessionEngine pronta em Setup."""
    from exam.engine.session_engine import ExamSessionEngine

    return ExamSessionEngine(
        sample_pool,
        settings=short_settings,
        sampler=seeded_sampler,
        clock=fake_clock,
    )


# =============================================================================
# FIXTURES DE MOCK - KV STORE
# =============================================================================


@pytest.fixture
def mock_kv():
    """Mock do KV (interface AgentFS.kv)."""
    mock = MagicMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def memory_kv():
    """KV em memoria funcional."""
    from exam.storage.memory_kv import MemoryKVStore

    return MemoryKVStore()


# =============================================================================
# FIXTURES UTILITARIAS
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs durante testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
