# core/gemini_client.py
from typing import Any, Dict, List, Optional, Sequence
import httpx
from config.settings import settings
from core.entities import GenerationResult
import logging
from util.timing import timed
from util.types import Part

logger = logging.getLogger(__name__)


async def _post_json(
    url: str, headers: Dict[str, str], payload: Dict[str, Any], timeout: float = 60.0
) -> Dict[str, Any]:
    """
    Make a JSON POST to `url`. Raises for non-2xx. Returns parsed JSON dict or {} on parse failure.
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        r = await client.post(url, headers=headers, json=payload)
        r.raise_for_status()
        try:
            return r.json()
        except ValueError:
            return {}


def text_part(text: str) -> Part:
    return {"text": text}


def inline_part(mime_type: str, data: str) -> Part:
    return {"inlineData": {"mimeType": mime_type, "data": data}}


def _endpoint(model: str) -> str:
    return f"{settings.GEMINI_API_URL.rstrip('/')}/models/{model}:generateContent"


def build_payload(
    *,
    parts: Sequence[Part],
    system_instruction: Optional[str] = None,
    history: Optional[Sequence[Dict[str, Any]]] = None,
    response_json: bool = False,
    use_search: bool = False,
    thinking_budget: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Assemble a generateContent body. `history` holds earlier turns as
    {"role": "user"|"model", "parts": [...]} and goes before the new user turn.
    """
    contents: List[Dict[str, Any]] = list(history or [])
    contents.append({"role": "user", "parts": list(parts)})
    payload: Dict[str, Any] = {"contents": contents}

    if system_instruction:
        payload["systemInstruction"] = {"parts": [text_part(system_instruction)]}
    if use_search:
        payload["tools"] = [{"googleSearch": {}}]

    generation_config: Dict[str, Any] = {}
    if response_json:
        generation_config["responseMimeType"] = "application/json"
    if thinking_budget is not None:
        generation_config["thinkingConfig"] = {"thinkingBudget": thinking_budget}
    if generation_config:
        payload["generationConfig"] = generation_config
    return payload


def read_response(data: Dict[str, Any]) -> GenerationResult:
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return GenerationResult(text="")

    first = candidates[0]
    content = first.get("content") or {}
    texts = [
        p.get("text") or ""
        for p in content.get("parts") or []
        if isinstance(p, dict) and not p.get("thought")
    ]
    grounding = first.get("groundingMetadata") or {}
    chunks = [c for c in grounding.get("groundingChunks") or [] if isinstance(c, dict)]
    return GenerationResult(text="".join(texts), grounding_chunks=chunks)


async def generate_content(
    *,
    api_key: str,
    model: str,
    parts: Sequence[Part],
    system_instruction: Optional[str] = None,
    history: Optional[Sequence[Dict[str, Any]]] = None,
    response_json: bool = False,
    use_search: bool = False,
    thinking_budget: Optional[int] = None,
    timeout: float = 60.0,
) -> GenerationResult:
    """
    Call Gemini generateContent once and return the first candidate's text
    and grounding chunks. Raises httpx errors for transport or non-2xx failures.
    """
    headers = {
        "x-goog-api-key": api_key,
        "content-type": "application/json",
    }
    payload = build_payload(
        parts=parts,
        system_instruction=system_instruction,
        history=history,
        response_json=response_json,
        use_search=use_search,
        thinking_budget=thinking_budget,
    )
    with timed(logger, "ai.generate", model=model, parts=len(parts)):
        data = await _post_json(_endpoint(model), headers, payload, timeout=timeout)

    result = read_response(data)
    logger.info(
        "ai.generate.result model=%s chars=%d chunks=%d",
        model,
        len(result.text),
        len(result.grounding_chunks),
    )
    return result
