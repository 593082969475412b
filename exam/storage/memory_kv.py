"""Memory KV - KV store em memoria (fallback quando AgentFS nao disponivel)."""

import copy
from typing import Any


class MemoryKVStore:
    """KV assincrono em memoria com a mesma interface de AgentFS.kv.

    Valores sao copiados na escrita e na leitura, como um store externo.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def list(self, prefix: str = "") -> list[dict[str, Any]]:
        return [{"key": key} for key in self._data if key.startswith(prefix)]
