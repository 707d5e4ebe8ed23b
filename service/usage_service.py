# service/usage_service.py
import logging
from config.settings import settings
from model.api import UsageResponse
from model.usage import Usage
from repository.usage_repository import UsageRepository
from util import functions
from util.enums import Language
from util.errors import DailyLimitError

logger = logging.getLogger(__name__)


class UsageService:
    """
    Daily analysis counter per client. Advisory only: a client that changes
    its id starts from zero.
    """

    def __init__(
        self, usage: UsageRepository, limit: int = settings.MAX_DAILY_QUERIES
    ) -> None:
        self._usage = usage
        self._limit = int(limit)

    async def _current(self, client_id: str) -> tuple[Usage, bool]:
        """Today's usage and whether the stored value was from an earlier day."""
        today = functions.today()
        stored = await self._usage.get(client_id)
        if stored is not None and stored.date == today:
            return stored, False
        return Usage(date=today, count=0), stored is not None

    async def check(self, client_id: str, language: Language) -> None:
        usage, stale = await self._current(client_id)
        if stale:
            await self._usage.put(client_id, usage)
            logger.info("usage.reset client=%s date=%s", client_id, usage.date)
        if usage.count >= self._limit:
            logger.warning(
                "usage.limit client=%s count=%d limit=%d",
                client_id,
                usage.count,
                self._limit,
            )
            raise DailyLimitError(language, self._limit)

    async def increment(self, client_id: str) -> Usage:
        usage, _ = await self._current(client_id)
        usage = Usage(date=usage.date, count=usage.count + 1)
        await self._usage.put(client_id, usage)
        logger.info("usage.increment client=%s count=%d", client_id, usage.count)
        return usage

    async def status(self, client_id: str) -> UsageResponse:
        usage, _ = await self._current(client_id)
        return UsageResponse(
            date=usage.date,
            count=usage.count,
            limit=self._limit,
            remaining=max(0, self._limit - usage.count),
        )
