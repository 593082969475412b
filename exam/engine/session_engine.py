"""Exam Session Engine - Maquina de estados da prova com cronometro."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from uuid import uuid4

from ..config import ExamSettings
from ..errors import InvalidOptionError, InvalidPositionError, InvalidStateError
from ..models.enums import ExamState
from ..models.schemas import ExamResult, Question, QuestionReview
from ..models.state import ExamSession, HistoryLog
from .sampler import QuestionSampler
from .scoring_engine import ExamScoringEngine
from .utils import format_time

logger = logging.getLogger(__name__)

TransitionListener = Callable[[ExamState, ExamState], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExamSessionEngine:
    """Controla uma tentativa: Setup -> InProgress -> Completed/Aborted.

    Transicoes:
        - start(): Setup -> InProgress (sorteia questoes, inicia cronometro)
        - answer(): InProgress -> InProgress (upsert da resposta)
        - tick(): InProgress -> InProgress, ou Completed quando o tempo acaba
        - submit(): InProgress -> Completed (pontua e grava no historico)
        - abort(): InProgress -> Aborted -> Setup (descarta a tentativa)
        - reset(): Completed -> Setup (historico preservado)

    Uma instancia por usuario; o historico so e escrito por submit().
    Listeners recebem (estado_anterior, novo_estado) a cada transicao,
    o que permite ao SessionTimer parar ao sair de InProgress.

    Example:
        >>> engine = ExamSessionEngine(pool)
        >>> engine.start(num_questions=20, duration_seconds=3600)
        >>> engine.answer(0, 2)
        >>> result = engine.submit()
        >>> result.score.percent
    """

    def __init__(
        self,
        pool: Sequence[Question],
        history: HistoryLog | None = None,
        settings: ExamSettings | None = None,
        sampler: QuestionSampler | None = None,
        scoring: ExamScoringEngine | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._pool = tuple(pool)
        self.history = history if history is not None else HistoryLog()
        self.settings = settings or ExamSettings()
        self.sampler = sampler or QuestionSampler()
        self.scoring = scoring or ExamScoringEngine(self.settings.pass_threshold)
        self._clock = clock or _utcnow
        self._session = ExamSession()
        self._last_result: ExamResult | None = None
        self._listeners: list[TransitionListener] = []

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ExamState:
        return self._session.state

    @property
    def session(self) -> ExamSession:
        """Sessao atual (somente leitura para quem chama)."""
        return self._session

    @property
    def pool_size(self) -> int:
        return len(self._pool)

    @property
    def selected(self) -> tuple[Question, ...]:
        return self._session.selected

    @property
    def answers(self) -> dict[int, int]:
        return dict(self._session.answers)

    @property
    def remaining_seconds(self) -> int:
        return self._session.remaining_seconds

    @property
    def remaining_display(self) -> str:
        return format_time(self._session.remaining_seconds)

    @property
    def answered_count(self) -> int:
        return self._session.answered_count

    @property
    def last_result(self) -> ExamResult | None:
        return self._last_result

    def review(self) -> list[QuestionReview]:
        """Revisao do ultimo resultado (vazia se nao houver)."""
        if self._last_result is None:
            return []
        return self.scoring.review(self._last_result.questions, self._last_result.answers)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TransitionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _transition(self, new_state: ExamState) -> None:
        previous = self._session.state
        self._session.state = new_state
        logger.debug(f"Transicao {previous.value} -> {new_state.value}")
        for listener in list(self._listeners):
            listener(previous, new_state)

    def _require(self, operation: str, *states: ExamState) -> None:
        if self._session.state not in states:
            raise InvalidStateError(operation, self._session.state.value)

    # -------------------------------------------------------------------------
    # Transicoes
    # -------------------------------------------------------------------------

    def start(
        self, num_questions: int | None = None, duration_seconds: int | None = None
    ) -> tuple[Question, ...]:
        """Inicia uma tentativa.

        Args:
            num_questions: Questoes desejadas (limitado a [1, tamanho do banco])
            duration_seconds: Duracao (limitada a faixa de ExamSettings)

        Returns:
            Questoes sorteadas

        Raises:
            EmptyPoolError: Banco vazio (estado permanece Setup)
            InvalidStateError: Sessao fora de Setup
        """
        self._require("start", ExamState.SETUP)

        if num_questions is None:
            num_questions = self.settings.num_questions
        if duration_seconds is None:
            duration_seconds = self.settings.duration_seconds
        duration = self.settings.clamp_duration(duration_seconds)

        # Sorteio antes de qualquer mutacao: falha mantem Setup intacto
        selected = self.sampler.sample(self._pool, num_questions)

        self._session.selected = selected
        self._session.answers = {}
        self._session.duration_seconds = duration
        self._session.remaining_seconds = duration
        self._session.started_at = self._clock()
        self._session.ended_at = None
        self._session.timed_out = False
        self._last_result = None
        self._transition(ExamState.IN_PROGRESS)

        logger.info(
            f"Exame {self.settings.exam_type} iniciado: {len(selected)} questoes, {duration}s"
        )
        return selected

    def answer(self, position: int, option_index: int) -> None:
        """Registra (ou substitui) a resposta de uma posicao.

        Raises:
            InvalidStateError: Sessao fora de InProgress
            InvalidPositionError: Posicao fora da sessao
            InvalidOptionError: Alternativa fora da questao
        """
        self._require("answer", ExamState.IN_PROGRESS)

        total = self._session.total_questions
        if not 0 <= position < total:
            raise InvalidPositionError(position, total)

        num_options = len(self._session.selected[position].options)
        if not 0 <= option_index < num_options:
            raise InvalidOptionError(position, option_index, num_options)

        self._session.answers[position] = option_index

    def tick(self) -> ExamResult | None:
        """Decrementa o cronometro em 1 segundo.

        Ao chegar em zero submete automaticamente com as respostas atuais
        (questoes em branco contam como erradas).

        Returns:
            ExamResult se o tick encerrou a prova, None caso contrario
        """
        if self._session.state != ExamState.IN_PROGRESS:
            logger.debug(f"Tick ignorado no estado {self._session.state.value}")
            return None

        self._session.remaining_seconds = max(0, self._session.remaining_seconds - 1)
        if self._session.remaining_seconds == 0:
            logger.info("Tempo esgotado - submetendo automaticamente")
            return self._complete(timed_out=True)
        return None

    def submit(self) -> ExamResult:
        """Encerra a prova, pontua e grava o resultado no historico.

        Segunda chamada com a prova ja concluida retorna o mesmo resultado
        sem gravar de novo.

        Raises:
            InvalidStateError: Sessao em Setup
        """
        if self._session.state == ExamState.COMPLETED and self._last_result is not None:
            return self._last_result

        self._require("submit", ExamState.IN_PROGRESS)
        return self._complete(timed_out=False)

    def abort(self) -> None:
        """Descarta a tentativa em andamento sem gerar resultado."""
        self._require("abort", ExamState.IN_PROGRESS)

        answered = self._session.answered_count
        self._transition(ExamState.ABORTED)
        self._clear_session()
        self._transition(ExamState.SETUP)

        logger.info(f"Exame abortado ({answered} respostas descartadas)")

    def reset(self) -> None:
        """Volta para Setup apos concluir (retry). Historico nao e alterado."""
        if self._session.state == ExamState.SETUP:
            return

        self._require("reset", ExamState.COMPLETED)
        self._clear_session()
        self._last_result = None
        self._transition(ExamState.SETUP)

    # -------------------------------------------------------------------------
    # Internos
    # -------------------------------------------------------------------------

    def _clear_session(self) -> None:
        state = self._session.state
        self._session.clear()
        # clear() volta para SETUP; a transicao e feita por _transition
        self._session.state = state

    def _complete(self, timed_out: bool) -> ExamResult:
        session = self._session
        session.ended_at = self._clock()
        session.timed_out = timed_out

        elapsed = (session.ended_at - session.started_at).total_seconds()
        score = self.scoring.score(session.selected, session.answers)

        result = ExamResult(
            id=uuid4().hex,
            exam_type=self.settings.exam_type,
            score=score,
            time_taken_seconds=max(0, int(elapsed)),
            timestamp=session.ended_at,
            questions=session.selected,
            answers=dict(session.answers),
            timed_out=timed_out,
            pass_threshold=self.scoring.pass_threshold,
        )

        self.history.append(result)
        self._last_result = result
        self._transition(ExamState.COMPLETED)

        logger.info(
            f"Exame concluido: {score.correct}/{score.total} ({score.percent}%)"
            f"{' por tempo esgotado' if timed_out else ''}"
        )
        return result
