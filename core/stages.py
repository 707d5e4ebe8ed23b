# core/stages.py
import asyncio
import json
import logging
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Dict,
    Final,
    List,
    Optional,
    Sequence,
    Tuple,
)
from fastapi import HTTPException
from config.settings import settings
from util.enums import AnalysisStage, ErrorMessage, Language, LOADING_STAGES
from util.translations import step_label, translate
from util.types import EventType

LINE_SEP: Final[str] = "\n"
logger = logging.getLogger(__name__)


def ndjson_line(obj: Dict[str, object]) -> bytes:
    return (json.dumps(obj, separators=(",", ":"), ensure_ascii=False) + LINE_SEP).encode(
        "utf-8"
    )


def event(type_: EventType, payload: Optional[Dict[str, Any]] = None) -> bytes:
    return ndjson_line({"type": type_, "payload": payload or {}})


def stage_schedule() -> List[Tuple[AnalysisStage, float]]:
    """(stage, seconds after start) for every loading stage after scanning."""
    return [
        (AnalysisStage.SEARCHING, settings.STAGE_SEARCHING_AT),
        (AnalysisStage.REASONING, settings.STAGE_REASONING_AT),
        (AnalysisStage.FINALIZING, settings.STAGE_FINALIZING_AT),
    ]


def loading_label(
    stage: AnalysisStage, language: Language, steps: Optional[Sequence[str]]
) -> str:
    if steps and len(steps) == len(LOADING_STAGES) and stage in LOADING_STAGES:
        return steps[LOADING_STAGES.index(stage)]
    return step_label(language, stage.value)


def _stage_event(
    stage: AnalysisStage, language: Language, steps: Optional[Sequence[str]]
) -> bytes:
    return event(
        "stage", {"stage": stage.value, "label": loading_label(stage, language, steps)}
    )


def _steps_of(task: "asyncio.Task[Optional[List[str]]]") -> Optional[List[str]]:
    if task.cancelled() or task.exception() is not None:
        return None
    return task.result()


async def stream_analysis(
    *,
    run: Awaitable[Any],
    steps: Awaitable[Optional[List[str]]],
    language: Language,
) -> AsyncIterator[bytes]:
    """
    Drive the loading screen while the analysis runs and emit NDJSON events:
      - stage: scanning now, then searching/reasoning/finalizing on schedule
        for as long as the model call is still in flight
      - steps: the contextual labels, once (and if) they arrive, followed by
        the current stage re-labelled
      - result (stage complete) or error (stage back to idle)
      - done, always last
    `run` must resolve to a pydantic model.
    """
    loop = asyncio.get_running_loop()
    started = loop.time()
    analysis = asyncio.ensure_future(run)
    steps_task = asyncio.ensure_future(steps)
    dynamic: Optional[List[str]] = None
    current = AnalysisStage.SCANNING
    schedule = iter(stage_schedule())
    upcoming = next(schedule, None)

    try:
        yield _stage_event(current, language, dynamic)

        while not analysis.done():
            waiters = {analysis}
            if not steps_task.done():
                waiters.add(steps_task)
            timeout = None
            if upcoming is not None:
                timeout = max(0.0, upcoming[1] - (loop.time() - started))

            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )

            if steps_task in done:
                dynamic = _steps_of(steps_task)
                if dynamic:
                    yield event("steps", {"steps": dynamic})
                    yield _stage_event(current, language, dynamic)
            if analysis in done:
                break
            if not done and upcoming is not None:
                current = upcoming[0]
                upcoming = next(schedule, None)
                yield _stage_event(current, language, dynamic)

        try:
            response = await analysis
        except HTTPException as e:
            logger.warning("stream.analysis.failed status=%d", e.status_code)
            yield event(
                "error", {"message": e.detail, "stage": AnalysisStage.IDLE.value}
            )
        except Exception:
            logger.error("stream.analysis.error", exc_info=True)
            yield event(
                "error",
                {
                    "message": translate(
                        language, ErrorMessage.ANALYSIS_FAILED.value.message
                    ),
                    "stage": AnalysisStage.IDLE.value,
                },
            )
        else:
            yield event(
                "result",
                {"stage": AnalysisStage.COMPLETE.value, **response.model_dump(mode="json")},
            )
        yield event("done")
    finally:
        for task in (analysis, steps_task):
            if not task.done():
                task.cancel()
        logger.info("stream.done ms=%d", int((loop.time() - started) * 1000))
