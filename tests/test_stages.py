# tests/test_stages.py
import asyncio
import json
from typing import List, Optional
from pydantic import BaseModel
from core.stages import loading_label, stream_analysis
from util.enums import AnalysisStage, Language
from util.errors import AppError


class _Done(BaseModel):
    id: str = "r1"


async def _collect(gen) -> List[dict]:
    return [json.loads(line) async for line in gen]


async def _after(delay: float, value=None, exc: Optional[BaseException] = None):
    await asyncio.sleep(delay)
    if exc is not None:
        raise exc
    return value


def _stages(events: List[dict]) -> List[str]:
    return [e["payload"]["stage"] for e in events if e["type"] == "stage"]


def test_loading_label_uses_dynamic_steps_only_when_four():
    steps = ["one", "two", "three", "four"]
    assert loading_label(AnalysisStage.REASONING, Language.EN, steps) == "three"
    assert loading_label(AnalysisStage.REASONING, Language.EN, steps[:3]) == (
        "Detecting deception patterns..."
    )
    assert loading_label(AnalysisStage.SCANNING, Language.PT, None) == (
        "Analisando impressões digitais..."
    )
    # complete/idle are not loading stages: fall back to the scanning label
    assert loading_label(AnalysisStage.COMPLETE, Language.EN, steps) == (
        "Analyzing digital fingerprints..."
    )


async def test_fast_analysis_skips_later_stages():
    events = await _collect(
        stream_analysis(
            run=_after(0, _Done()), steps=_after(1.0, None), language=Language.EN
        )
    )
    assert [e["type"] for e in events] == ["stage", "result", "done"]
    assert events[0]["payload"] == {
        "stage": "scanning",
        "label": "Analyzing digital fingerprints...",
    }
    assert events[1]["payload"] == {"stage": "complete", "id": "r1"}


async def test_slow_analysis_walks_every_stage_in_order():
    events = await _collect(
        stream_analysis(
            run=_after(0.3, _Done()), steps=_after(0, None), language=Language.ES
        )
    )
    assert _stages(events) == ["scanning", "searching", "reasoning", "finalizing"]
    assert events[-2]["type"] == "result"
    assert events[-1] == {"type": "done", "payload": {}}
    assert not any(e["type"] == "steps" for e in events)


async def test_dynamic_steps_relabel_the_current_stage():
    steps = ["Reading link", "Searching", "Thinking", "Writing"]
    events = await _collect(
        stream_analysis(
            run=_after(0.12, _Done()), steps=_after(0.01, steps), language=Language.EN
        )
    )
    types = [e["type"] for e in events]
    assert types[:3] == ["stage", "steps", "stage"]
    assert events[1]["payload"] == {"steps": steps}
    assert events[2]["payload"] == {"stage": "scanning", "label": "Reading link"}
    labels = [e["payload"]["label"] for e in events if e["type"] == "stage"]
    assert "Thinking" in labels


async def test_app_error_is_reported_and_stage_returns_to_idle():
    events = await _collect(
        stream_analysis(
            run=_after(0, exc=AppError("Analysis error.", 502)),
            steps=_after(0, None),
            language=Language.EN,
        )
    )
    error = next(e for e in events if e["type"] == "error")
    assert error["payload"] == {"message": "Analysis error.", "stage": "idle"}
    assert events[-1]["type"] == "done"


async def test_unexpected_error_gets_the_localized_message():
    events = await _collect(
        stream_analysis(
            run=_after(0, exc=RuntimeError("boom")),
            steps=_after(0, None),
            language=Language.PT,
        )
    )
    error = next(e for e in events if e["type"] == "error")
    assert error["payload"]["message"] == "Erro na análise."
