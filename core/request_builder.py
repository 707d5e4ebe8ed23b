# core/request_builder.py
from typing import List, Sequence
from core.gemini_client import inline_part, text_part
from model.media import MediaFile, MediaType
from util.constants import STEPS_SNIPPET_CHARS
from util.enums import Language
from util.translations import language_name
from util.types import Part


def _url_instruction(url: str) -> str:
    return (
        f"PRIMARY SOURCE URL: {url}. \n"
        "INSTRUCTION: Use Google Search to READ the full content of this URL. \n"
        "Your analysis MUST be based on the content retrieved from this URL. \n"
        "Extract the main text content you read and include it in the "
        "'extractedContent' JSON field."
    )


def _audio_evidence(media: MediaFile) -> str:
    return (
        f"[AUDIO EVIDENCE - FILE ID: {media.id}]:\n"
        f"Technical Pre-Analysis: {media.analysis or 'Pending or Failed'}\n"
        f'Transcript: "{media.transcription or "No transcript"}"\n'
        "INSTRUCTION: Use the above audio transcript and technical analysis to judge "
        "the credibility of the audio content. Consider potential deepfake artifacts "
        "mentioned in the technical analysis."
    )


def build_analysis_parts(
    text: str, url: str, media_files: Sequence[MediaFile]
) -> List[Part]:
    """
    Order matters: URL grounding first, then free text, then evidence
    files in upload order. Audio goes in as its transcript and
    pre-analysis; images and video go in as inline bytes.
    """
    parts: List[Part] = []
    if url:
        parts.append(text_part(_url_instruction(url)))
    if text:
        parts.append(text_part(f"ADDITIONAL CONTEXT: {text}"))
    for media in media_files:
        if media.type == MediaType.audio:
            parts.append(text_part(_audio_evidence(media)))
        else:
            parts.append(inline_part(media.mimeType, media.data))
    return parts


def analysis_system_prompt(language: Language) -> str:
    name = language_name(language)
    return f"""
You are 'Veritas', an advanced digital forensic analyst specializing in Fraud & Misinformation Detection.
Analyze the input (URL, Text, Image, Audio, or Video) for the following threats:
1. **Misinformation**: Fake News, Rumors, Conspiracy Theories.
2. **Cyber Threats**: Phishing Emails, Scam Attempts, Social Engineering, Financial Fraud.
3. **Digital Manipulation**: Deepfakes (Video/Audio), AI-generated Images, Altered Documents.

If a URL is provided, you MUST fetch/search its content and use it as the primary evidence.

Strictly output JSON:
{{
  "score": number, // 0-100 (100=Safe/True/Legitimate, 0=Fraud/Fake/Dangerous)
  "verdict": "CREDIBLE" | "SUSPICIOUS" | "FAKE" | "SATIRE",
  "isAiGenerated": boolean,
  "aiConfidence": number,
  "aiReasoning": "1 sentence technical explanation about AI artifacts in {name}",
  "summary": "Concise executive summary of the threat level in {name}. Reference specific details from the input.",
  "extractedContent": "A brief summary (max 300 chars) of the text content read from the URL or input to prove you analyzed it (in {name}).",
  "claims": [{{ "text": "Key Point/Red Flag", "isFact": boolean, "assessment": "Concise analysis in {name}" }}]
}}
"""


def steps_prompt(
    text: str, media_types: Sequence[str], url: str, language: Language
) -> str:
    """Prompt for the four contextual loading messages."""
    snippet = f'"{text[:STEPS_SNIPPET_CHARS]}..."' if text else ""
    if url:
        snippet += f" URL: {url}"
    if not snippet:
        snippet = "No text"
    context = f"Content: [{snippet}]"
    if media_types:
        context += f" with attachments: [{', '.join(media_types)}]"

    return f"""
Generate 4 short, highly contextual, forensic analysis status messages (max 6 words each) for a loading screen.
The app is analyzing this specific user content: {context}.
If a URL is present, step 1 should mention fetching or reading the URL.

The messages must represent these 4 sequential stages:
1. Scanning/Ingestion (specific to content type, e.g., "Analyzing pixel data" or "Reading article")
2. External Search/Verification (e.g., "Cross-referencing legal DBs")
3. Logic/Reasoning/AI Detection
4. Final Report Generation

Language: {Language(language).value} ({language_name(language)}).
Output strictly a JSON array of 4 strings.
"""
