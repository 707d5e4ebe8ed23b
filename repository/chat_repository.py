# repository/chat_repository.py
from typing import Final, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.chat import ChatSession
from repository.namespaces import CHATS

KEY_PREFIX: Final[str] = CHATS


class ChatRepository:
    """
    Flow:
    - One JSON document per follow-up session, keyed by chat id.
    - The full transcript is stored so every turn can be replayed to the model.
    - TTL refreshed on set/get to keep it alive during active sessions.
    """

    def __init__(self, ttl_seconds: int = settings.PERSISTENCE_TTL_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(chat_id: str) -> str:
        return f"{KEY_PREFIX}:{chat_id}"

    async def set(self, session: ChatSession) -> None:
        r = await self._client()
        payload = session.model_dump_json().encode("utf-8")
        await r.set(self._key(session.id), payload, ex=self._ttl)

    async def get(self, chat_id: str) -> Optional[ChatSession]:
        if not chat_id:
            return None
        r = await self._client()
        raw = await r.get(self._key(chat_id))
        if raw is None:
            return None
        try:
            obj = ChatSession.model_validate_json(raw)
        finally:
            await r.expire(self._key(chat_id), self._ttl)
        return obj
