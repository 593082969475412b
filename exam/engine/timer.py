"""Session Timer - Agendador periodico de ticks (asyncio)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..models.enums import ExamState
from ..models.schemas import ExamResult
from .session_engine import ExamSessionEngine

logger = logging.getLogger(__name__)

TimeoutCallback = Callable[[ExamResult], Awaitable[None]]


class SessionTimer:
    """Entrega tick() ao engine a cada `interval` segundos enquanto InProgress.

    O timer se registra como listener do engine e e cancelado em qualquer
    transicao para fora de InProgress (submit, abort ou timeout), de modo
    que nenhum tick chega depois do fim da prova.

    Example:
        >>> timer = SessionTimer(engine, interval=1.0, on_timeout=persist)
        >>> engine.start(20, 3600)
        >>> timer.start()
    """

    def __init__(
        self,
        engine: ExamSessionEngine,
        interval: float = 1.0,
        on_timeout: TimeoutCallback | None = None,
    ):
        self.engine = engine
        self.interval = interval
        self.on_timeout = on_timeout
        self._task: asyncio.Task | None = None
        engine.add_listener(self._on_transition)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Inicia o loop de ticks (requer engine em InProgress e event loop ativo)."""
        if self.running:
            return
        if self.engine.state != ExamState.IN_PROGRESS:
            logger.debug("Timer nao iniciado: sessao fora de InProgress")
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        """Cancela o loop (idempotente)."""
        if self._task is not None and not self._task.done():
            if self._task is not asyncio.current_task():
                self._task.cancel()
        self._task = None

    def close(self) -> None:
        """Cancela e remove o listener do engine."""
        self.cancel()
        self.engine.remove_listener(self._on_transition)

    def _on_transition(self, previous: ExamState, new_state: ExamState) -> None:
        if previous == ExamState.IN_PROGRESS and new_state != ExamState.IN_PROGRESS:
            self.cancel()

    async def _run(self) -> None:
        try:
            while self.engine.state == ExamState.IN_PROGRESS:
                await asyncio.sleep(self.interval)
                if self.engine.state != ExamState.IN_PROGRESS:
                    break
                result = self.engine.tick()
                if result is not None:
                    if self.on_timeout is not None:
                        await self.on_timeout(result)
                    break
        except asyncio.CancelledError:
            logger.debug("Timer cancelado")
            raise
