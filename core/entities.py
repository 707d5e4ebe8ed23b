# core/entities.py
from dataclasses import dataclass, field
from typing import Any, Dict, List
from model.media import MediaFile
from util.enums import Language


@dataclass
class GenerationResult:
    """
    Text of the first candidate (thought parts excluded) plus its
    grounding chunks, untouched.
    """

    text: str
    grounding_chunks: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class PreparedAnalysis:
    """Validated inputs for one analysis run, resolved against the media draft."""

    client_id: str
    api_key: str
    language: Language
    text: str
    url: str
    media: List[MediaFile] = field(default_factory=list)
