# core/response_parser.py
import json
import re
from typing import Any, Dict, List, Optional, Sequence
from pydantic import ValidationError
from model.verification import Source, VerificationResult
from util.errors import InvalidModelOutput

# Greedy on purpose: first "{" through last "}" of the reply.
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(raw: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of free model text (prose, code fences, etc.).
    Raises InvalidModelOutput when there is none or it does not decode.
    """
    match = _JSON_OBJECT.search(raw or "")
    if not match:
        raise InvalidModelOutput("no JSON object in model output")
    try:
        obj = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise InvalidModelOutput(f"malformed JSON in model output: {e.msg}") from e
    if not isinstance(obj, dict):
        raise InvalidModelOutput("model output is not a JSON object")
    return obj


def parse_verification(raw: str) -> VerificationResult:
    obj = extract_json_object(raw)
    try:
        return VerificationResult.model_validate(obj)
    except ValidationError as e:
        raise InvalidModelOutput(
            f"verification result failed validation ({e.error_count()} errors)"
        ) from e


def extract_sources(chunks: Sequence[Dict[str, Any]]) -> List[Source]:
    """
    Web grounding chunks -> unique sources keyed by uri. A repeated uri keeps
    its first position but takes the later title.
    """
    unique: Dict[str, Source] = {}
    for chunk in chunks:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if not isinstance(web, dict) or not web:
            continue
        title, uri = web.get("title"), web.get("uri")
        source = Source(
            title=title if isinstance(title, str) and title else "Source",
            uri=uri if isinstance(uri, str) and uri else "#",
        )
        unique[source.uri] = source
    return list(unique.values())


def parse_json_value(raw: str) -> Any:
    """Decode a reply produced with responseMimeType=application/json."""
    text = (raw or "").strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.startswith("json"):
            text = text[4:]
    return json.loads(text or "null")


def parse_steps(raw: str) -> Optional[List[str]]:
    """Exactly four status strings, or None."""
    try:
        value = parse_json_value(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(value, list) or len(value) != 4:
        return None
    return [str(v) for v in value]
