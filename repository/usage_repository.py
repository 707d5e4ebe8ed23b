# repository/usage_repository.py
import logging
from typing import Optional
from pydantic import ValidationError
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.usage import Usage
from repository.namespaces import USAGE

logger = logging.getLogger(__name__)


class UsageRepository:
    """
    One JSON document per client: {"date": "YYYY-MM-DD", "count": n}.
    Expires a couple of days after the last write.
    """

    def __init__(self, ttl_seconds: int = settings.USAGE_TTL_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(client_id: str) -> str:
        return f"{USAGE}:{client_id}"

    async def get(self, client_id: str) -> Optional[Usage]:
        r = await self._client()
        raw = await r.get(self._key(client_id))
        if raw is None:
            return None
        try:
            return Usage.model_validate_json(raw)
        except ValidationError:
            logger.warning("usage.malformed client=%s", client_id)
            return None

    async def put(self, client_id: str, usage: Usage) -> None:
        r = await self._client()
        await r.set(
            self._key(client_id), usage.model_dump_json().encode("utf-8"), ex=self._ttl
        )
