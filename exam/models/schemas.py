"""Exam Schemas - Modelos Pydantic para questoes, resultados e analytics."""

from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)

from .enums import ExamState, QuestionCategory, TrendSignal


class Question(BaseModel):
    """Questao de multipla escolha do banco (imutavel apos carga)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., alias="question", description="Enunciado da questao")
    options: tuple[str, ...] = Field(..., min_length=2, description="Alternativas em ordem")
    correct_index: int = Field(
        ..., alias="correct", ge=0, description="Indice da alternativa correta"
    )
    explanation: str | None = Field(
        default=None, description="Explicacao exibida na revisao"
    )

    @model_validator(mode="after")
    def _check_correct_index(self) -> "Question":
        if self.correct_index >= len(self.options):
            raise ValueError(
                f"correct={self.correct_index} fora do intervalo de "
                f"{len(self.options)} alternativas"
            )
        return self


class Score(BaseModel):
    """Pontuacao de uma tentativa."""

    model_config = ConfigDict(frozen=True)

    correct: int = Field(..., ge=0, description="Respostas corretas")
    total: int = Field(..., ge=0, description="Total de questoes da sessao")
    percent: int = Field(..., ge=0, le=100, description="Percentual arredondado")


class ExamResult(BaseModel):
    """Snapshot imutavel de uma sessao concluida (criado uma unica vez)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ID unico do resultado")
    exam_type: str = Field(..., description="Tipo de exame (ex: iso27001)")
    score: Score
    time_taken_seconds: int = Field(..., ge=0, description="Duracao real da tentativa")
    timestamp: datetime = Field(..., description="Momento da submissao")
    questions: tuple[Question, ...] = Field(..., description="Copia das questoes sorteadas")
    answers: Mapping[int, int] = Field(
        default_factory=dict,
        validate_default=True,
        description="Posicao -> alternativa escolhida (somente leitura)",
    )
    timed_out: bool = Field(default=False, description="Submetido por fim do tempo")
    pass_threshold: int = Field(default=70, ge=0, le=100)

    @field_validator("answers", mode="after")
    @classmethod
    def _freeze_answers(cls, value: Mapping[int, int]) -> Mapping[int, int]:
        return MappingProxyType(dict(value))

    @field_serializer("answers")
    def _serialize_answers(self, value: Mapping[int, int]) -> dict[int, int]:
        return dict(value)

    @property
    def passed(self) -> bool:
        return self.score.percent >= self.pass_threshold


class QuestionReview(BaseModel):
    """Revisao de uma questao apos a submissao."""

    position: int
    text: str
    selected_index: int | None = None
    selected_option: str | None = None
    correct_index: int
    correct_option: str
    is_correct: bool
    explanation: str | None = None

    @computed_field
    @property
    def answered(self) -> bool:
        return self.selected_index is not None


# =============================================================================
# ANALYTICS
# =============================================================================


class OverallStats(BaseModel):
    """Estatisticas agregadas do historico."""

    total_exams: int = 0
    average_score: int = 0
    pass_rate: int = 0
    total_time_spent_minutes: int = 0
    average_time_per_exam_minutes: int = 0
    improvement_trend: int = 0


class WeakArea(BaseModel):
    """Desempenho agregado de uma categoria."""

    category: QuestionCategory
    correct: int
    total: int
    percentage: int
    needs_focus: bool = Field(
        default=False, description="Percentual abaixo da nota de aprovacao"
    )


class PerformancePoint(BaseModel):
    """Ponto da serie temporal de desempenho."""

    index: int = Field(..., ge=1, description="Numero do exame (1-based)")
    percent: int
    timestamp: datetime
    time_taken_seconds: int


class RecentPerformance(BaseModel):
    """Resumo rapido exibido na tela de configuracao."""

    last_score: int = 0
    average_score: int = 0
    best_score: int = 0


class AnalyticsSummary(BaseModel):
    """Resumo derivado do historico (nunca persistido)."""

    overall: OverallStats
    weak_areas: list[WeakArea] = Field(default_factory=list)
    performance: list[PerformancePoint] = Field(default_factory=list)
    recent: RecentPerformance
    trend: TrendSignal


# =============================================================================
# REQUEST / RESPONSE
# =============================================================================


class StartExamRequest(BaseModel):
    """Request para iniciar uma sessao."""

    num_questions: int | None = Field(
        default=None, description="Numero de questoes (limitado ao tamanho do banco)"
    )
    duration_seconds: int | None = Field(
        default=None, description="Duracao em segundos (limitada a faixa configurada)"
    )


class AnswerRequest(BaseModel):
    """Request para registrar uma resposta."""

    position: int = Field(..., description="Posicao da questao na sessao (0-based)")
    option_index: int = Field(..., description="Indice da alternativa escolhida")


class SessionQuestion(BaseModel):
    """Questao exibida durante a prova (sem gabarito)."""

    position: int
    text: str
    options: list[str]
    selected_index: int | None = None


class SessionStatusResponse(BaseModel):
    """Estado atual da sessao de um usuario."""

    state: ExamState
    total_questions: int
    answered: int
    duration_seconds: int
    remaining_seconds: int
    remaining_display: str
    questions: list[SessionQuestion] = Field(default_factory=list)


class ExamResultResponse(BaseModel):
    """Resultado final com revisao das respostas."""

    result_id: str
    score: Score
    passed: bool
    pass_threshold: int
    time_taken_seconds: int
    time_taken_display: str
    timed_out: bool
    review: list[QuestionReview]
