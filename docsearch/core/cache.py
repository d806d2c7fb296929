import logging
import time
from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional, Tuple
import uuid

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, ...]

_MISSING = object()


class QueryCache:
    """Кэш результатов запросов, ключ - параметры запроса.

    Ключ всегда имеет вид ``(kind, owner_id, *params)``, поэтому записи одного
    пользователя можно сбросить разом через :meth:`invalidate`. Каждый сброс
    увеличивает поколение владельца: результат чтения, начатого до сброса,
    в кэш уже не попадёт.
    """

    def __init__(self, ttl_seconds: float = 30.0, max_entries: int = 1024):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Tuple[float, Any]]" = OrderedDict()
        self._generations: Dict[uuid.UUID, int] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0 and self.max_entries > 0

    def generation(self, owner_id: uuid.UUID) -> int:
        """Текущее поколение записей владельца"""
        return self._generations.get(owner_id, 0)

    def get(self, key: CacheKey, default: Any = None) -> Any:
        """Получение значения, если оно есть и не устарело"""
        entry = self._entries.get(key)
        if entry is None:
            return default

        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._entries[key]
            return default

        return value

    def contains(self, key: CacheKey) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: CacheKey, value: Any, generation: Optional[int] = None) -> bool:
        """Сохранение значения.

        Если передано ``generation`` и оно уже не совпадает с текущим
        поколением владельца, значение отбрасывается.
        """
        if not self.enabled:
            return False

        owner_id = key[1]
        if generation is not None and generation != self.generation(owner_id):
            logger.debug(f"Dropping stale cache write for {key[0]} of owner {owner_id}")
            return False

        self._entries[key] = (time.monotonic() + self.ttl_seconds, value)
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

        return True

    def invalidate(self, owner_id: uuid.UUID) -> int:
        """Сброс всех записей владельца"""
        self._generations[owner_id] = self.generation(owner_id) + 1

        stale = [key for key in self._entries if key[1] == owner_id]
        for key in stale:
            del self._entries[key]

        logger.debug(f"Invalidated {len(stale)} cached queries of owner {owner_id}")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()

    def __len__(self) -> int:
        return len(self._entries)
