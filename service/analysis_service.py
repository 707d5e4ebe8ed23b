# service/analysis_service.py
import logging
from typing import AsyncIterator, List, Optional, Sequence
import httpx
from config.settings import settings
from core.entities import PreparedAnalysis
from core.gemini_client import generate_content, text_part
from core.request_builder import (
    analysis_system_prompt,
    build_analysis_parts,
    steps_prompt,
)
from core.response_parser import extract_sources, parse_steps, parse_verification
from core.stages import stream_analysis
from model.api import AnalysisResponse, AnalyzedInput, AnalyzeRequest
from model.media import MediaSummary
from service.chat_service import ChatService
from service.history_service import HistoryService
from service.media_service import MediaService
from service.usage_service import UsageService
from util import functions
from util.constants import PREVIEW_CHARS
from util.enums import ErrorMessage, Language
from util.errors import InvalidModelOutput, localized_error
from util.timing import timed

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(
        self,
        usage: UsageService,
        media: MediaService,
        history: HistoryService,
        chats: ChatService,
    ) -> None:
        self._usage = usage
        self._media = media
        self._history = history
        self._chats = chats

    async def prepare(self, client_id: str, request: AnalyzeRequest) -> PreparedAnalysis:
        """
        Gatekeeping before any model call, in this order: daily limit,
        something to analyze, API key configured, attachments ready.
        """
        language = request.language
        await self._usage.check(client_id, language)

        text = request.text or ""
        url = (request.url or "").strip()
        if not text and not url and not request.mediaIds:
            raise localized_error(ErrorMessage.INPUT_REQUIRED, language)
        if not settings.GEMINI_API_KEY:
            raise localized_error(ErrorMessage.MISSING_API_KEY, language)

        media = await self._media.resolve(client_id, request.mediaIds, language)
        return PreparedAnalysis(
            client_id=client_id,
            api_key=settings.GEMINI_API_KEY,
            language=language,
            text=text,
            url=url,
            media=media,
        )

    async def run(self, job: PreparedAnalysis) -> AnalysisResponse:
        """
        One forensic model call. Usage, history and the chat session are
        only touched after the reply parsed cleanly.
        """
        parts = build_analysis_parts(job.text, job.url, job.media)
        logger.info(
            "analysis.start client=%s parts=%d media=%d url=%s",
            job.client_id,
            len(parts),
            len(job.media),
            bool(job.url),
        )
        try:
            with timed(logger, "analysis.model", model=settings.ANALYSIS_MODEL):
                reply = await generate_content(
                    api_key=job.api_key,
                    model=settings.ANALYSIS_MODEL,
                    parts=parts,
                    system_instruction=analysis_system_prompt(job.language),
                    use_search=True,
                    thinking_budget=settings.THINKING_BUDGET,
                    timeout=settings.ANALYSIS_TIMEOUT_SECONDS,
                )
            sources = extract_sources(reply.grounding_chunks)
            result = parse_verification(reply.text)
        except (httpx.HTTPError, InvalidModelOutput) as e:
            logger.error(
                "analysis.error client=%s err=%s", job.client_id, type(e).__name__
            )
            raise localized_error(ErrorMessage.ANALYSIS_FAILED, job.language)

        await self._usage.increment(job.client_id)
        preview = functions.build_preview(
            job.text, job.url, [m.type.value for m in job.media], PREVIEW_CHARS
        )
        item = await self._history.save(job.client_id, result, preview, sources)
        chat_id = await self._chats.start(result)

        logger.info(
            "analysis.ok client=%s item=%s verdict=%s score=%d sources=%d",
            job.client_id,
            item.id,
            result.verdict.value,
            result.score,
            len(sources),
        )
        return AnalysisResponse(
            id=item.id,
            result=result,
            sources=sources,
            previewText=item.previewText,
            chatId=chat_id,
            input=AnalyzedInput(
                text=job.text,
                url=job.url,
                media=[MediaSummary.of(m) for m in job.media],
            ),
        )

    async def analyze(self, client_id: str, request: AnalyzeRequest) -> AnalysisResponse:
        return await self.run(await self.prepare(client_id, request))

    async def dynamic_steps(
        self,
        text: str,
        media_types: Sequence[str],
        url: str,
        language: Language,
    ) -> Optional[List[str]]:
        """
        Four contextual loading messages from the fast model. Best effort:
        any failure means the default labels are used.
        """
        if not settings.GEMINI_API_KEY:
            return None
        try:
            reply = await generate_content(
                api_key=settings.GEMINI_API_KEY,
                model=settings.FAST_MODEL,
                parts=[text_part(steps_prompt(text, media_types, url, language))],
                response_json=True,
                timeout=settings.FAST_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as e:
            logger.info("analysis.steps.fallback err=%s", type(e).__name__)
            return None
        steps = parse_steps(reply.text)
        if steps is None:
            logger.info("analysis.steps.fallback err=shape")
        return steps

    def stream(self, job: PreparedAnalysis) -> AsyncIterator[bytes]:
        return stream_analysis(
            run=self.run(job),
            steps=self.dynamic_steps(
                job.text, [m.type.value for m in job.media], job.url, job.language
            ),
            language=job.language,
        )
