"""Exam Router - Endpoints FastAPI da sessao de prova e analytics."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

import app_state

from .config import EXAM_PROFILES
from .engine.analytics_engine import AnalyticsEngine
from .engine.session_engine import ExamSessionEngine
from .engine.utils import format_time
from .errors import (
    EmptyPoolError,
    InvalidOptionError,
    InvalidPositionError,
    InvalidStateError,
)
from .models.schemas import (
    AnalyticsSummary,
    AnswerRequest,
    ExamResult,
    ExamResultResponse,
    SessionQuestion,
    SessionStatusResponse,
    StartExamRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exam", tags=["Exam"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


async def get_analytics_engine() -> AnalyticsEngine:
    """Dependency para obter AnalyticsEngine."""
    return AnalyticsEngine(pass_threshold=app_state.get_settings().pass_threshold)


def _status(engine: ExamSessionEngine) -> SessionStatusResponse:
    session = engine.session
    return SessionStatusResponse(
        state=engine.state,
        total_questions=session.total_questions,
        answered=session.answered_count,
        duration_seconds=session.duration_seconds,
        remaining_seconds=session.remaining_seconds,
        remaining_display=engine.remaining_display,
        questions=[
            SessionQuestion(
                position=position,
                text=question.text,
                options=list(question.options),
                selected_index=session.answers.get(position),
            )
            for position, question in enumerate(session.selected)
        ],
    )


def _result_response(engine: ExamSessionEngine, result: ExamResult) -> ExamResultResponse:
    return ExamResultResponse(
        result_id=result.id,
        score=result.score,
        passed=result.passed,
        pass_threshold=result.pass_threshold,
        time_taken_seconds=result.time_taken_seconds,
        time_taken_display=format_time(result.time_taken_seconds),
        timed_out=result.timed_out,
        review=engine.scoring.review(result.questions, result.answers),
    )


# =============================================================================
# EXAM TYPES
# =============================================================================


@router.get("/types")
async def list_exam_types():
    """Lista os perfis de exame (formato PECB) e sua disponibilidade."""
    return [asdict(profile) for profile in EXAM_PROFILES.values()]


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================


@router.post("/{user_id}/start", response_model=SessionStatusResponse)
async def start_exam(user_id: str, request: StartExamRequest | None = None):
    """Inicia uma prova para o usuario.

    - Sorteia as questoes do banco (sem repeticao)
    - Inicia o cronometro de 1 Hz; ao zerar, a prova e submetida sozinha
    """
    request = request or StartExamRequest()
    engine = await app_state.get_engine(user_id)

    try:
        engine.start(request.num_questions, request.duration_seconds)
    except EmptyPoolError as e:
        logger.error(f"[{user_id}] Prova nao pode iniciar: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    app_state.start_timer(user_id, engine)
    return _status(engine)


@router.post("/{user_id}/answer", response_model=SessionStatusResponse)
async def answer_question(user_id: str, request: AnswerRequest):
    """Registra ou substitui a resposta de uma questao."""
    engine = await app_state.get_engine(user_id)

    try:
        engine.answer(request.position, request.option_index)
    except (InvalidPositionError, InvalidOptionError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return _status(engine)


@router.post("/{user_id}/submit", response_model=ExamResultResponse)
async def submit_exam(user_id: str):
    """Encerra a prova, calcula a nota e persiste o historico.

    Chamadas repetidas retornam o mesmo resultado sem duplicar o historico.
    """
    engine = await app_state.get_engine(user_id)
    history_size = len(engine.history)

    try:
        result = engine.submit()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    if len(engine.history) != history_size:
        await app_state.persist_history(user_id)

    return _result_response(engine, result)


@router.post("/{user_id}/abort", response_model=SessionStatusResponse)
async def abort_exam(user_id: str):
    """Descarta a prova em andamento sem gerar resultado."""
    engine = await app_state.get_engine(user_id)

    try:
        engine.abort()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return _status(engine)


@router.post("/{user_id}/reset", response_model=SessionStatusResponse)
async def reset_exam(user_id: str):
    """Volta para a configuracao apos o resultado (nova tentativa)."""
    engine = await app_state.get_engine(user_id)

    try:
        engine.reset()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return _status(engine)


@router.get("/{user_id}/status", response_model=SessionStatusResponse)
async def get_exam_status(user_id: str):
    """Retorna estado, progresso e tempo restante da prova."""
    engine = await app_state.get_engine(user_id)
    return _status(engine)


@router.get("/{user_id}/result", response_model=ExamResultResponse)
async def get_exam_result(user_id: str):
    """Retorna o ultimo resultado com a revisao das respostas."""
    engine = await app_state.get_engine(user_id)
    result = engine.last_result

    if result is None:
        raise HTTPException(status_code=404, detail="Nenhum resultado disponivel")

    return _result_response(engine, result)


# =============================================================================
# ANALYTICS
# =============================================================================


@router.get("/{user_id}/analytics", response_model=AnalyticsSummary)
async def get_analytics(
    user_id: str,
    analytics: AnalyticsEngine = Depends(get_analytics_engine),
):
    """Calcula estatisticas, areas fracas e serie de desempenho do historico."""
    engine = await app_state.get_engine(user_id)
    return analytics.summarize(engine.history.snapshot())
