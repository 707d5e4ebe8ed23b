# repository/media_repository.py
import logging
from typing import List, Optional
from pydantic import ValidationError
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.media import MediaFile
from repository.namespaces import MEDIA

logger = logging.getLogger(__name__)


class MediaRepository:
    """
    Redis hash per client holding the attachments of the analysis being
    composed (field = media id, value = MediaFile JSON incl. base64 bytes).

    TTL is refreshed on every write so an active draft survives.
    """

    def __init__(self, ttl_seconds: int = settings.PERSISTENCE_TTL_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(client_id: str) -> str:
        return f"{MEDIA}:{client_id}"

    async def put(self, client_id: str, media: MediaFile) -> None:
        r = await self._client()
        payload = media.model_dump_json(exclude_none=True).encode("utf-8")
        await r.hset(self._key(client_id), media.id, payload)
        await r.expire(self._key(client_id), self._ttl)

    async def get(self, client_id: str, media_id: str) -> Optional[MediaFile]:
        r = await self._client()
        raw = await r.hget(self._key(client_id), media_id)
        if raw is None:
            return None
        try:
            return MediaFile.model_validate_json(raw)
        except ValidationError:
            logger.warning("media.malformed client=%s media=%s", client_id, media_id)
            return None

    async def all(self, client_id: str) -> List[MediaFile]:
        """All files of the draft, oldest first."""
        r = await self._client()
        h = await r.hgetall(self._key(client_id))
        out: List[MediaFile] = []
        for raw in (h or {}).values():
            try:
                out.append(MediaFile.model_validate_json(raw))
            except ValidationError:
                continue
        out.sort(key=lambda m: m.createdAt)
        return out

    async def delete(self, client_id: str, media_id: str) -> int:
        r = await self._client()
        return int(await r.hdel(self._key(client_id), media_id))

    async def clear(self, client_id: str) -> int:
        r = await self._client()
        return int(await r.delete(self._key(client_id)))
