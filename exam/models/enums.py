"""Exam Enums - Estados, categorias e tendencias."""

from enum import Enum


class ExamState(str, Enum):
    """Estados da maquina de estados da sessao de exame."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABORTED = "aborted"  # Transitorio - volta imediatamente para SETUP


class QuestionCategory(str, Enum):
    """Taxonomia fixa de categorias (ordem = prioridade de classificacao)."""

    RISK_MANAGEMENT = "Risk Management"
    SECURITY_CONTROLS = "Security Controls"
    ISMS_FRAMEWORK = "ISMS Framework"
    AUDIT_COMPLIANCE = "Audit & Compliance"
    DOCUMENTATION = "Documentation"
    IMPLEMENTATION = "Implementation"
    GENERAL = "General"


class TrendSignal(str, Enum):
    """Sinal de tendencia derivado do improvement_trend."""

    IMPROVING = "improving"  # > +5 pontos
    STEADY = "steady"
    DECLINING = "declining"  # < -5 pontos
