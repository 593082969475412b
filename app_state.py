"""Core module - shared state and helper functions."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

import config
from exam.config import ExamSettings
from exam.engine import ExamSessionEngine, SessionTimer
from exam.errors import QuestionBankError
from exam.models.schemas import ExamResult, Question
from exam.storage import HistoryStore, KVStore, MemoryKVStore, load_question_bank

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)

AGENTFS_ID = "exam-practice"

# =============================================================================
# GLOBAL STATE
# =============================================================================

settings: Optional[ExamSettings] = None
pool: Optional[tuple[Question, ...]] = None
agentfs: Optional[AgentFS] = None
kv: Optional[KVStore] = None

# Uma engine + historico por usuario (sem estado mutavel compartilhado entre eles)
engines: dict[str, ExamSessionEngine] = {}
timers: dict[str, SessionTimer] = {}

_engine_lock = asyncio.Lock()


def get_settings() -> ExamSettings:
    """Get ExamSettings (lidas do ambiente uma vez)."""
    global settings
    if settings is None:
        settings = config.get_settings()
    return settings


def get_pool() -> tuple[Question, ...]:
    """Get question pool (carregado uma vez, somente leitura)."""
    global pool
    if pool is None:
        path = config.get_question_bank_path()
        try:
            pool = load_question_bank(path)
        except QuestionBankError as e:
            logger.error(f"Banco de questoes indisponivel: {e}")
            pool = ()
    return pool


async def get_kv() -> KVStore:
    """Get KV store do historico (AgentFS ou memoria)."""
    global agentfs, kv
    if kv is None:
        if config.get_storage_backend() == "agentfs":
            from agentfs_sdk import AgentFS, AgentFSOptions

            agentfs = await AgentFS.open(AgentFSOptions(id=AGENTFS_ID))
            kv = agentfs.kv
            logger.info(f"Historico persistido no AgentFS ({AGENTFS_ID})")
        else:
            kv = MemoryKVStore()
            logger.info("Historico persistido em memoria")
    return kv


async def get_history_store() -> HistoryStore:
    """Get HistoryStore sobre o KV ativo."""
    return HistoryStore(await get_kv())


async def get_engine(user_id: str) -> ExamSessionEngine:
    """Get (ou cria) a engine de um usuario, carregando o historico uma vez."""
    engine = engines.get(user_id)
    if engine is not None:
        return engine

    async with _engine_lock:
        engine = engines.get(user_id)
        if engine is None:
            exam_settings = get_settings()
            store = await get_history_store()
            history = await store.load_history(user_id, exam_settings.exam_type)
            engine = ExamSessionEngine(get_pool(), history=history, settings=exam_settings)
            engines[user_id] = engine
            logger.info(f"Engine criada para {user_id} ({len(history)} resultados)")
    return engine


async def persist_history(user_id: str) -> None:
    """Reescreve o historico do usuario (chamado apos cada submit)."""
    engine = engines.get(user_id)
    if engine is None:
        return
    store = await get_history_store()
    await store.save_history(user_id, engine.settings.exam_type, engine.history)


def start_timer(user_id: str, engine: ExamSessionEngine) -> SessionTimer:
    """Inicia o timer de 1 Hz da sessao; timeout persiste o historico."""

    async def on_timeout(result: ExamResult) -> None:
        logger.info(f"[{user_id}] Tempo esgotado: {result.score.percent}%")
        await persist_history(user_id)

    timer = timers.get(user_id)
    if timer is None:
        timer = SessionTimer(engine, interval=engine.settings.tick_interval, on_timeout=on_timeout)
        timers[user_id] = timer
    timer.start()
    return timer


async def cleanup():
    """Cleanup resources on shutdown."""
    global agentfs, kv
    for timer in timers.values():
        timer.close()
    timers.clear()
    if agentfs is not None:
        try:
            await agentfs.close()
            logger.info("AgentFS closed!")
        except Exception as e:
            logger.warning(f"Error closing agentfs: {e}")
        agentfs = None
    kv = None


def reset_state() -> None:
    """Descarta todo o estado em memoria (usado em testes)."""
    global settings, pool, kv, agentfs
    for timer in timers.values():
        timer.close()
    timers.clear()
    engines.clear()
    settings = None
    pool = None
    kv = None
    agentfs = None
