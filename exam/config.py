"""Exam Config - Parametros de prova e perfis de exame."""

from dataclasses import dataclass

# Formato oficial PECB
PECB_TOTAL_QUESTIONS = 80
PECB_DURATION_MINUTES = 180
PECB_PASS_PERCENT = 70

MIN_DURATION_SECONDS = 600  # 10 minutos
MAX_DURATION_SECONDS = 28800  # 8 horas


@dataclass(frozen=True)
class ExamProfile:
    """Perfil de um tipo de exame disponivel no seletor."""

    id: str
    title: str
    subtitle: str
    total_questions: int = PECB_TOTAL_QUESTIONS
    duration_minutes: int = PECB_DURATION_MINUTES
    pass_percent: int = PECB_PASS_PERCENT
    available: bool = True


EXAM_PROFILES: dict[str, ExamProfile] = {
    "iso27001": ExamProfile(
        id="iso27001",
        title="ISO 27001:2022",
        subtitle="Information Security Management System (ISMS)",
    ),
    "iso22301": ExamProfile(
        id="iso22301",
        title="ISO 22301:2019",
        subtitle="Business Continuity Management System (BCMS)",
        available=False,
    ),
}

# Atalho "Quick 20Q Practice"
QUICK_PRACTICE_QUESTIONS = 20
QUICK_PRACTICE_MINUTES = 60


@dataclass
class ExamSettings:
    """Configuracao aplicada pelo motor de sessao.

    Attributes:
        exam_type: ID do perfil ativo
        num_questions: Numero padrao de questoes por sessao
        duration_seconds: Duracao padrao da sessao
        min_duration_seconds: Limite inferior para duration_seconds
        max_duration_seconds: Limite superior para duration_seconds
        pass_threshold: Percentual minimo para aprovacao
        tick_interval: Intervalo do timer em segundos (1 Hz em producao)
    """

    exam_type: str = "iso27001"
    num_questions: int = PECB_TOTAL_QUESTIONS
    duration_seconds: int = PECB_DURATION_MINUTES * 60
    min_duration_seconds: int = MIN_DURATION_SECONDS
    max_duration_seconds: int = MAX_DURATION_SECONDS
    pass_threshold: int = PECB_PASS_PERCENT
    tick_interval: float = 1.0

    def clamp_duration(self, duration_seconds: int) -> int:
        """Limita a duracao a faixa configurada (nunca menos de 1 segundo)."""
        lower = max(1, self.min_duration_seconds)
        return max(lower, min(duration_seconds, self.max_duration_seconds))

    @classmethod
    def for_profile(cls, profile: ExamProfile, **overrides) -> "ExamSettings":
        """Cria settings a partir de um perfil de exame."""
        values = {
            "exam_type": profile.id,
            "num_questions": profile.total_questions,
            "duration_seconds": profile.duration_minutes * 60,
            "pass_threshold": profile.pass_percent,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def quick_practice(cls, **overrides) -> "ExamSettings":
        """Settings do modo pratica rapida (20 questoes, 60 minutos)."""
        values = {
            "num_questions": QUICK_PRACTICE_QUESTIONS,
            "duration_seconds": QUICK_PRACTICE_MINUTES * 60,
        }
        values.update(overrides)
        return cls(**values)


def get_profile(exam_type: str) -> ExamProfile | None:
    """Busca perfil de exame pelo ID."""
    return EXAM_PROFILES.get(exam_type)
