"""Exam Storage - Persistencia de historico e carga do banco de questoes."""

from .history_store import HistoryStore, KVStore
from .memory_kv import MemoryKVStore
from .question_bank import load_question_bank, parse_question_bank

__all__ = [
    "HistoryStore",
    "KVStore",
    "MemoryKVStore",
    "load_question_bank",
    "parse_question_bank",
]
