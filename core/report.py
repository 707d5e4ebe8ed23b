# core/report.py
from datetime import datetime, timezone
from typing import List, Literal
from model.history import HistoryItem
from util.enums import Language
from util.translations import translate, verdict_label

ScoreBand = Literal["low", "medium", "high"]

_BAND_KEYS = {"low": "scoreLow", "medium": "scoreMedium", "high": "scoreHigh"}


def score_band(score: int) -> ScoreBand:
    if score < 50:
        return "low"
    if score < 80:
        return "medium"
    return "high"


def render_report(item: HistoryItem, language: Language) -> str:
    """
    Markdown rendering of a saved verdict, used for print/copy/share.
    """
    def t(key: str) -> str:
        return translate(language, key)

    result = item.result
    band = t(_BAND_KEYS[score_band(result.score)])
    when = datetime.fromtimestamp(item.timestamp / 1000, tz=timezone.utc)

    lines: List[str] = [
        f"# {t('title')} · {t('reportHeader')}",
        "",
        f"_{when.strftime('%Y-%m-%d %H:%M UTC')} · ID {item.id}_",
        "",
        f"**{t('inputSummaryTitle')}:** {item.previewText}",
        "",
        f"## {verdict_label(language, result.verdict.value)}",
        "",
        f"**{t('scoreLabel')}:** {result.score}/100 ({band})",
        "",
        f"### {t('summary')}",
        "",
        f'> "{result.summary}"',
    ]

    if result.extractedContent:
        lines += ["", f"### {t('analyzedContent')}", "", f"...{result.extractedContent}..."]

    lines += ["", f"### {t('claims')}", ""]
    for claim in result.claims:
        mark = "✓" if claim.isFact else "✗"
        lines.append(f"- {mark} **{claim.text}**: {claim.assessment}")

    ai_label = t("aiDetected") if result.isAiGenerated else t("aiClean")
    lines += ["", f"### {ai_label}", ""]
    if result.isAiGenerated:
        lines.append(f"{t('aiProbability')}: {result.aiConfidence:g}%")
    if result.aiReasoning:
        lines.append(result.aiReasoning)

    lines += ["", f"### {t('sources')}", ""]
    if item.sources:
        lines += [f"- [{s.title}]({s.uri})" for s in item.sources]
    else:
        lines.append(f"_{t('noSources')}_")

    return "\n".join(lines) + "\n"
