# service/chat_service.py
import logging
from uuid import uuid4
import httpx
from config.settings import settings
from core.gemini_client import generate_content, text_part
from model.chat import ChatMessage, ChatSession
from model.verification import VerificationResult
from repository.chat_repository import ChatRepository
from util.enums import ErrorMessage, Language
from util.errors import localized_error

logger = logging.getLogger(__name__)


class ChatService:
    """Follow-up questions about a finished report, one session per report view."""

    def __init__(self, chats: ChatRepository) -> None:
        self._chats = chats

    async def start(self, result: VerificationResult) -> str:
        session = ChatSession(
            id=str(uuid4()),
            model=settings.CHAT_MODEL,
            systemInstruction=settings.CHAT_SYSTEM_PROMPT + result.model_dump_json(),
        )
        await self._chats.set(session)
        logger.info("chat.start chat=%s", session.id)
        return session.id

    async def _session(self, chat_id: str, language: Language) -> ChatSession:
        session = await self._chats.get(chat_id)
        if session is None:
            raise localized_error(ErrorMessage.CHAT_NOT_FOUND, language)
        return session

    async def transcript(self, chat_id: str, language: Language) -> list[ChatMessage]:
        return (await self._session(chat_id, language)).messages

    async def send(self, chat_id: str, message: str, language: Language) -> ChatMessage:
        """
        Replays the stored transcript plus the new question; the transcript
        is only extended once the model has answered.
        """
        text = (message or "").strip()
        if not text:
            raise localized_error(ErrorMessage.INPUT_REQUIRED, language)
        if not settings.GEMINI_API_KEY:
            raise localized_error(ErrorMessage.MISSING_API_KEY, language)

        session = await self._session(chat_id, language)
        history = [
            {"role": m.role, "parts": [text_part(m.text)]} for m in session.messages
        ]
        try:
            reply = await generate_content(
                api_key=settings.GEMINI_API_KEY,
                model=session.model,
                parts=[text_part(text)],
                system_instruction=session.systemInstruction,
                history=history,
                timeout=settings.ANALYSIS_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as e:
            logger.error("chat.send.error chat=%s err=%s", chat_id, type(e).__name__)
            raise localized_error(ErrorMessage.CHAT_FAILED, language)

        answer = ChatMessage(role="model", text=reply.text)
        session.messages.extend([ChatMessage(role="user", text=text), answer])
        await self._chats.set(session)
        logger.info("chat.send.ok chat=%s turns=%d", chat_id, len(session.messages))
        return answer
