# util/types.py
from typing import Any, Dict, Literal, Union


# Flow: Narrow types for NDJSON events.
EventType = Literal["stage", "steps", "result", "error", "done"]

# A Gemini content part: {"text": ...} or {"inlineData": {"mimeType": ..., "data": ...}}
Part = Dict[str, Union[str, Dict[str, Any]]]
