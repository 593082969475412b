"""Exam State - Sessao em andamento e historico de resultados."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .enums import ExamState
from .schemas import ExamResult, Question


@dataclass
class ExamSession:
    """Estado mutavel de uma tentativa.

    Attributes:
        selected: Questoes sorteadas para a sessao (fixas ate o reset)
        answers: Posicao -> alternativa escolhida (esparso)
        duration_seconds: Duracao configurada
        remaining_seconds: Tempo restante (0..duration_seconds)
        state: Estado atual da maquina de estados
        started_at: Momento do start
        ended_at: Momento da submissao
        timed_out: Se a submissao foi disparada pelo fim do tempo
    """

    selected: tuple[Question, ...] = ()
    answers: dict[int, int] = field(default_factory=dict)
    duration_seconds: int = 0
    remaining_seconds: int = 0
    state: ExamState = ExamState.SETUP
    started_at: datetime | None = None
    ended_at: datetime | None = None
    timed_out: bool = False

    @property
    def total_questions(self) -> int:
        return len(self.selected)

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    def is_answered(self, position: int) -> bool:
        """Verifica se uma posicao ja foi respondida."""
        return position in self.answers

    def clear(self) -> None:
        """Volta ao estado inicial (sem questoes e sem respostas)."""
        self.selected = ()
        self.answers = {}
        self.duration_seconds = 0
        self.remaining_seconds = 0
        self.state = ExamState.SETUP
        self.started_at = None
        self.ended_at = None
        self.timed_out = False


class HistoryLog:
    """Historico append-only de resultados, em ordem de submissao.

    Unico escritor: ExamSessionEngine.submit(). Leitores recebem
    snapshots imutaveis via snapshot().
    """

    def __init__(self, results: Iterable[ExamResult] = ()):
        self._results: list[ExamResult] = list(results)

    def append(self, result: ExamResult) -> None:
        self._results.append(result)

    def snapshot(self) -> tuple[ExamResult, ...]:
        """Retorna copia imutavel para leitura (analytics, persistencia)."""
        return tuple(self._results)

    def last(self) -> ExamResult | None:
        return self._results[-1] if self._results else None

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ExamResult]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> ExamResult:
        return self._results[index]

    def to_records(self) -> list[dict[str, Any]]:
        """Serializa para lista JSON-compativel (para persistencia)."""
        return [r.model_dump(mode="json", by_alias=True) for r in self._results]

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "HistoryLog":
        """Cria historico a partir de registros serializados."""
        return cls(ExamResult.model_validate(record) for record in records)
