"""History Store - Persistencia do historico de exames em um KV store."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from ..errors import MalformedHistoryRecordError
from ..models.state import HistoryLog

logger = logging.getLogger(__name__)


class KVStore(Protocol):
    """Interface minima de KV assincrono (compativel com AgentFS.kv)."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any) -> Any: ...

    async def delete(self, key: str) -> Any: ...


class HistoryStore:
    """Abstracao sobre um KV store para persistir o HistoryLog.

    O historico inteiro fica em um unico registro, reescrito a cada
    submissao (substituicao completa).

    Estrutura de chaves:
        - exam:{user_id}:{exam_type}:history -> lista de ExamResult serializados

    Example:
        >>> store = HistoryStore(agentfs.kv)
        >>> history = await store.load_history("alice", "iso27001")
        >>> await store.save_history("alice", "iso27001", history)
    """

    KEY_PREFIX = "exam"

    def __init__(self, kv: KVStore):
        """Inicializa store com o KV (AgentFS.kv ou MemoryKVStore).

        Args:
            kv: Objeto com get/set/delete assincronos
        """
        self.kv = kv

    def _history_key(self, user_id: str, exam_type: str) -> str:
        """Gera chave do historico de um usuario."""
        return f"{self.KEY_PREFIX}:{user_id}:{exam_type}:history"

    @staticmethod
    def parse_history(data: Any) -> HistoryLog:
        """Interpreta o payload persistido.

        Raises:
            MalformedHistoryRecordError: Payload nao e uma lista de resultados validos
        """
        if not isinstance(data, list):
            raise MalformedHistoryRecordError(
                f"Historico deveria ser lista, recebido {type(data).__name__}"
            )
        try:
            return HistoryLog.from_records(data)
        except (ValidationError, TypeError) as e:
            raise MalformedHistoryRecordError(str(e)) from e

    async def load_history(self, user_id: str, exam_type: str) -> HistoryLog:
        """Carrega o historico; ausente ou corrompido vira historico vazio.

        Args:
            user_id: ID do usuario
            exam_type: Tipo de exame

        Returns:
            HistoryLog carregado (vazio se nao houver registro valido)
        """
        key = self._history_key(user_id, exam_type)
        data = await self.kv.get(key)

        if not data:
            logger.debug(f"Historico nao encontrado: {key}")
            return HistoryLog()

        try:
            history = self.parse_history(data)
        except MalformedHistoryRecordError as e:
            logger.warning(f"Historico corrompido em {key}, iniciando vazio: {e}")
            return HistoryLog()

        logger.debug(f"Historico carregado: {key} ({len(history)} resultados)")
        return history

    async def save_history(self, user_id: str, exam_type: str, history: HistoryLog) -> None:
        """Reescreve o registro do historico por completo.

        Args:
            user_id: ID do usuario
            exam_type: Tipo de exame
            history: Historico a persistir
        """
        key = self._history_key(user_id, exam_type)
        await self.kv.set(key, history.to_records())
        logger.debug(f"Historico salvo: {key} ({len(history)} resultados)")

    async def clear_history(self, user_id: str, exam_type: str) -> None:
        """Remove o registro do historico."""
        key = self._history_key(user_id, exam_type)
        await self.kv.delete(key)
        logger.info(f"Historico removido: {key}")
