# repository/history_repository.py
import logging
from typing import List, Optional
from pydantic import ValidationError
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.history import HistoryItem
from repository.namespaces import HISTORY

logger = logging.getLogger(__name__)


class HistoryRepository:
    """
    Flow:
    - LPUSH each saved analysis so the list stays newest-first.
    - LTRIM right after, keeping at most `limit` items per client.
    - TTL is refreshed on every write.
    """

    def __init__(
        self,
        ttl_seconds: int = settings.HISTORY_TTL_SECONDS,
        limit: int = settings.HISTORY_LIMIT,
    ) -> None:
        self._ttl = int(ttl_seconds)
        self._limit = int(limit)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(client_id: str) -> str:
        return f"{HISTORY}:{client_id}"

    async def prepend(self, client_id: str, item: HistoryItem) -> None:
        r = await self._client()
        key = self._key(client_id)
        payload = item.model_dump_json(exclude_none=True).encode("utf-8")
        async with r.pipeline(transaction=True) as pipe:
            pipe.lpush(key, payload)
            pipe.ltrim(key, 0, self._limit - 1)
            pipe.expire(key, self._ttl)
            await pipe.execute()

    async def all(self, client_id: str) -> List[HistoryItem]:
        r = await self._client()
        vals = await r.lrange(self._key(client_id), 0, -1)
        out: List[HistoryItem] = []
        for raw in vals or []:
            try:
                out.append(HistoryItem.model_validate_json(raw))
            except ValidationError:
                # Skip malformed entries instead of failing the whole listing
                logger.warning("history.malformed client=%s", client_id)
                continue
        return out

    async def get(self, client_id: str, item_id: str) -> Optional[HistoryItem]:
        for item in await self.all(client_id):
            if item.id == item_id:
                return item
        return None

    async def clear(self, client_id: str) -> int:
        r = await self._client()
        return int(await r.delete(self._key(client_id)))
