import asyncio
import json

from analyzer import AnalysisResult, analyze, apply_analysis, build_analysis_instructions, parse_analysis
from assembler import SelectionState


def test_instructions_list_catalog_ids():
    instructions = build_analysis_instructions()
    assert "sony-a7r-v" in instructions
    assert "85mm-f12" in instructions
    assert "golden-hour" in instructions
    assert "medium-closeup" in instructions
    assert "BODY_IDS" not in instructions


def test_analyze_keeps_known_ids_only(fake_client_factory):
    reply = json.dumps(
        {
            "subject": "An old fisherman mending nets at sunrise",
            "suggestedBodyId": "leica-m11",
            "suggestedLensId": "600mm-f4",
            "suggestedStyleId": "golden-hour",
            "suggestedShotSizeId": "medium-shot",
        }
    )
    client = fake_client_factory(image_reply=reply)

    result = asyncio.run(analyze(b"\x89PNG", "image/png", client))

    assert result.subject == "An old fisherman mending nets at sunrise"
    assert result.suggestions == {
        "body": "leica-m11",
        "lighting_style": "golden-hour",
        "shot_size": "medium-shot",
    }
    call = client.image_calls[0]
    assert call["image_bytes"] == b"\x89PNG"
    assert call["mime_type"] == "image/png"


def test_parse_failure_returns_empty():
    assert parse_analysis("the model rambled") == AnalysisResult()


def test_blank_subject_is_dropped():
    result = parse_analysis(json.dumps({"subject": "   ", "suggestedLensId": "35mm-f14"}))
    assert result.subject is None
    assert result.suggestions == {"lens": "35mm-f14"}


def test_service_failure_returns_empty(fake_client_factory, service_error):
    client = fake_client_factory(image_reply=service_error)
    assert asyncio.run(analyze(b"data", "image/jpeg", client)) == AnalysisResult()


def test_apply_analysis_updates_selection():
    selection = SelectionState(subject="old subject", lens="35mm-f14")
    result = AnalysisResult(subject="new subject", suggestions={"body": "nikon-z9", "shot_size": "closeup"})

    updated = apply_analysis(selection, result)

    assert updated.subject == "new subject"
    assert updated.body == "nikon-z9"
    assert updated.shot_size == "closeup"
    assert updated.lens == "35mm-f14"


def test_apply_analysis_revalidates_ids():
    selection = SelectionState()
    result = AnalysisResult(suggestions={"body": "not-a-camera", "weather": "heavy-fog"})
    assert apply_analysis(selection, result) == selection


def test_apply_empty_result_keeps_selection():
    selection = SelectionState(subject="keep me")
    assert apply_analysis(selection, AnalysisResult()) is selection
