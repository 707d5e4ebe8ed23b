# service/history_service.py
import logging
from core.report import render_report
from model.api import HistoryLoadResponse
from model.history import HistoryItem
from model.verification import Source, VerificationResult
from repository.history_repository import HistoryRepository
from service.chat_service import ChatService
from util import functions
from util.enums import ErrorMessage, Language
from util.errors import localized_error

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, history: HistoryRepository, chats: ChatService) -> None:
        self._history = history
        self._chats = chats

    async def save(
        self,
        client_id: str,
        result: VerificationResult,
        preview: str,
        sources: list[Source],
    ) -> HistoryItem:
        item = HistoryItem(
            id=functions.random_id(9),
            timestamp=functions.now_ms(),
            result=result,
            previewText=preview or "Media Analysis",
            sources=sources,
        )
        await self._history.prepend(client_id, item)
        logger.info("history.save client=%s item=%s", client_id, item.id)
        return item

    async def list(self, client_id: str) -> list[HistoryItem]:
        return await self._history.all(client_id)

    async def get(self, client_id: str, item_id: str, language: Language) -> HistoryItem:
        item = await self._history.get(client_id, item_id)
        if item is None:
            raise localized_error(ErrorMessage.HISTORY_NOT_FOUND, language)
        return item

    async def load(
        self, client_id: str, item_id: str, language: Language
    ) -> HistoryLoadResponse:
        """Reopen a saved report with a fresh follow-up session."""
        item = await self.get(client_id, item_id, language)
        chat_id = await self._chats.start(item.result)
        logger.info("history.load client=%s item=%s", client_id, item_id)
        return HistoryLoadResponse(item=item, chatId=chat_id)

    async def clear(self, client_id: str) -> int:
        removed = await self._history.clear(client_id)
        logger.info("history.clear client=%s", client_id)
        return removed

    async def report(self, client_id: str, item_id: str, language: Language) -> str:
        return render_report(await self.get(client_id, item_id, language), language)
