# =============================================================================
# CONFIGURACAO DO EXAM PRACTICE - Variaveis de ambiente
# =============================================================================

import os
from pathlib import Path

from dotenv import load_dotenv

from exam.config import (
    EXAM_PROFILES,
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    ExamSettings,
)

load_dotenv()

# Banco de questoes padrao (lista JSON de {question, options, correct, explanation})
DEFAULT_QUESTION_BANK_PATH = Path(__file__).parent / "data" / "questions.json"

# -----------------------------------------------------------------------------
# Leitura do ambiente
# -----------------------------------------------------------------------------


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_exam_type() -> str:
    """Tipo de exame ativo (EXAM_TYPE, padrao iso27001)."""
    exam_type = os.getenv("EXAM_TYPE", "iso27001")
    return exam_type if exam_type in EXAM_PROFILES else "iso27001"


def get_settings() -> ExamSettings:
    """Monta ExamSettings a partir do perfil ativo + overrides do ambiente."""
    profile = EXAM_PROFILES[get_exam_type()]
    return ExamSettings.for_profile(
        profile,
        num_questions=_get_int("EXAM_NUM_QUESTIONS", profile.total_questions),
        duration_seconds=_get_int("EXAM_DURATION_MINUTES", profile.duration_minutes) * 60,
        min_duration_seconds=_get_int("EXAM_MIN_DURATION_SECONDS", MIN_DURATION_SECONDS),
        max_duration_seconds=_get_int("EXAM_MAX_DURATION_SECONDS", MAX_DURATION_SECONDS),
        pass_threshold=_get_int("EXAM_PASS_THRESHOLD", profile.pass_percent),
        tick_interval=_get_float("EXAM_TICK_INTERVAL", 1.0),
    )


def get_question_bank_path() -> Path:
    """Caminho do banco de questoes (QUESTION_BANK_PATH)."""
    return Path(os.getenv("QUESTION_BANK_PATH", str(DEFAULT_QUESTION_BANK_PATH)))


def get_storage_backend() -> str:
    """Backend do historico: 'memory' (padrao) ou 'agentfs'."""
    return os.getenv("EXAM_STORAGE", "memory").lower()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
