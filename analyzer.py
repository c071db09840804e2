from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from assembler import SelectionState
from catalog import CATEGORIES, is_valid_option
from llm_utils import LLMClient, parse_json_object
from prompts_lib import analyze_image_instructions

logger = logging.getLogger(__name__)

# response key -> selection category
SUGGESTION_KEYS: dict[str, str] = {
    "suggestedBodyId": "body",
    "suggestedLensId": "lens",
    "suggestedStyleId": "lighting_style",
    "suggestedShotSizeId": "shot_size",
}


class AnalysisResult(BaseModel):
    subject: Optional[str] = None
    suggestions: dict[str, str] = Field(default_factory=dict)


def _ids(category: str) -> str:
    return ", ".join(record.id for record in CATEGORIES[category])


def build_analysis_instructions() -> str:
    return (
        analyze_image_instructions.replace("BODY_IDS", _ids("body"))
        .replace("LENS_IDS", _ids("lens"))
        .replace("STYLE_IDS", _ids("lighting_style"))
        .replace("SHOT_SIZE_IDS", _ids("shot_size"))
    )


def parse_analysis(text: str) -> AnalysisResult:
    try:
        data = parse_json_object(text or "{}")
    except ValueError:
        logger.warning("Image analysis response was not JSON; ignoring it.")
        return AnalysisResult()

    subject = data.get("subject")
    if not isinstance(subject, str) or not subject.strip():
        subject = None
    else:
        subject = subject.strip()

    suggestions: dict[str, str] = {}
    for key, category in SUGGESTION_KEYS.items():
        value = data.get(key)
        if isinstance(value, str) and is_valid_option(category, value):
            suggestions[category] = value
    return AnalysisResult(subject=subject, suggestions=suggestions)


async def analyze(image_bytes: bytes, mime_type: str, client: LLMClient) -> AnalysisResult:
    try:
        raw = await client.describe_image(
            image_bytes,
            mime_type or "image/jpeg",
            build_analysis_instructions(),
            json_mode=True,
        )
    except Exception:
        logger.exception("Image analysis failed; leaving the selection unchanged.")
        return AnalysisResult()
    return parse_analysis(raw)


def apply_analysis(selection: SelectionState, result: AnalysisResult) -> SelectionState:
    updates: dict[str, str] = {
        category: option_id
        for category, option_id in result.suggestions.items()
        if category in SUGGESTION_KEYS.values() and is_valid_option(category, option_id)
    }
    if result.subject:
        updates["subject"] = result.subject
    if not updates:
        return selection
    return selection.model_copy(update=updates)
