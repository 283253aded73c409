"""Tests for vision reply normalization."""

from __future__ import annotations

import json

import pytest

from screenshot_analyzer.models import AnalysisResult, Annotation
from screenshot_analyzer.normalizer import (
    Section,
    extract_fenced_block,
    normalize,
    parse_fenced,
    parse_structured,
    scan_sections,
)


def test_structured_reply_is_taken_as_is() -> None:
    result = normalize('{"uxInsights":["a"],"visualDesign":[],"bestPractices":["b"]}')
    assert result.ux_insights == ["a"]
    assert result.visual_design == []
    assert result.best_practices == ["b"]
    assert result.annotations == []


def test_structured_reply_with_missing_fields_gets_empty_lists() -> None:
    result = normalize('{"visualDesign": ["Balanced layout"]}')
    assert result.ux_insights == []
    assert result.visual_design == ["Balanced layout"]
    assert result.best_practices == []


def test_empty_structured_reply_does_not_fall_back() -> None:
    result = normalize("{}")
    assert result == AnalysisResult()


def test_structured_reply_with_null_and_wrong_types_is_treated_as_empty() -> None:
    result = normalize('{"uxInsights": null, "visualDesign": "not a list", "annotations": {"x": 1}}')
    assert result.ux_insights == []
    assert result.visual_design == []
    assert result.annotations == []


def test_structured_reply_keeps_annotations() -> None:
    reply = json.dumps({
        "uxInsights": ["Button is hard to find"],
        "annotations": [{"x": 100, "y": 200, "width": 50, "height": 30, "text": "Primary CTA"}],
    })
    result = normalize(reply)
    assert result.annotations == [Annotation(x=100, y=200, width=50, height=30, text="Primary CTA")]


def test_malformed_annotations_are_dropped() -> None:
    reply = json.dumps({
        "annotations": [
            {"x": 1, "y": 2, "width": 3, "height": 4, "text": "kept"},
            {"x": "left", "text": "dropped"},
            "not an object",
        ],
    })
    result = normalize(reply)
    assert [a.text for a in result.annotations] == ["kept"]


def test_unstructured_reply_files_bullets_under_headings() -> None:
    result = normalize("UX Insights\n- Good contrast\n- Confusing nav\nBest Practices\n1. Add alt text")
    assert result.ux_insights == ["Good contrast", "Confusing nav"]
    assert result.visual_design == []
    assert result.best_practices == ["Add alt text"]
    assert result.annotations == []


def test_bullets_before_any_heading_go_to_ux_insights() -> None:
    result = normalize("Here is my review:\n• Labels are clear\n\n  2. Spacing is tight  ")
    assert result.ux_insights == ["Labels are clear", "Spacing is tight"]


def test_visual_heading_switches_section() -> None:
    result = normalize("Visual feedback\n- Palette is muted\n10. Icons are inconsistent")
    assert result.visual_design == ["Palette is muted", "Icons are inconsistent"]
    assert result.ux_insights == []


def test_keyword_line_with_bullet_only_switches_section() -> None:
    result = normalize("- Visual polish\n- Rounded corners\n- Follow best practices\n- Use a grid")
    assert result.visual_design == ["Rounded corners"]
    assert result.best_practices == ["Use a grid"]
    assert result.ux_insights == []


def test_keyword_match_is_case_insensitive_and_ordered() -> None:
    # "usability" is checked before "design"
    result = normalize("USABILITY AND DESIGN\n- Tap targets are small")
    assert result.ux_insights == ["Tap targets are small"]


def test_empty_bullets_and_plain_lines_are_ignored() -> None:
    result = normalize("Best practices\n-\n1.   \nJust a sentence.\n- Compress images")
    assert result.best_practices == ["Compress images"]


def test_plain_prose_becomes_single_insight() -> None:
    text = "This design looks fine overall."
    result = normalize(text)
    assert result.ux_insights == [text]
    assert result.visual_design == []
    assert result.best_practices == []
    assert result.annotations == []


def test_headings_without_items_fall_back_to_whole_text() -> None:
    text = "UX Insights\nVisual Design\nBest Practices"
    assert normalize(text).ux_insights == [text]


def test_empty_reply_becomes_single_empty_insight() -> None:
    result = normalize("")
    assert result.ux_insights == [""]
    assert result.visual_design == []
    assert result.best_practices == []


@pytest.mark.parametrize("reply", ["42", '"just a string"', "[1, 2]", "null"])
def test_non_object_json_is_not_a_structured_record(reply: str) -> None:
    assert parse_structured(reply) is None
    assert normalize(reply).ux_insights == [reply]


def test_fenced_json_reply_is_parsed_structurally() -> None:
    reply = '\n```json\n{"uxInsights": ["Clear flow"], "bestPractices": ["Add labels"]}\n```\n'
    result = normalize(reply)
    assert result.ux_insights == ["Clear flow"]
    assert result.best_practices == ["Add labels"]


def test_bare_fence_is_parsed_structurally() -> None:
    reply = '```\n{"visualDesign": ["Good whitespace"]}\n```'
    assert parse_fenced(reply).visual_design == ["Good whitespace"]


def test_incidental_fenced_snippet_keeps_bullet_items() -> None:
    reply = 'UX Insights\n- Buttons are too small\nSuggested token:\n```json\n{"padding": 8}\n```'
    assert parse_fenced(reply) is None
    result = normalize(reply)
    assert result.ux_insights == ["Buttons are too small"]
    assert result.visual_design == []
    assert result.best_practices == []


def test_fence_without_record_fields_is_not_structured() -> None:
    reply = '```json\n{"padding": 8}\n```'
    assert parse_fenced(reply) is None
    assert normalize(reply).ux_insights == [reply]


def test_fence_with_surrounding_prose_is_scanned_as_text() -> None:
    reply = 'Sure! Here is the analysis:\n```json\n{"uxInsights": ["Clear flow"]}\n```'
    assert parse_fenced(reply) is None
    assert normalize(reply).ux_insights == [reply]


def test_unterminated_fence_is_ignored() -> None:
    assert extract_fenced_block("```json\n{") is None
    assert extract_fenced_block("no fence here") is None
    assert extract_fenced_block('before\n```\n{"uxInsights": []}\n```') is None


def test_scan_sections_reports_no_match_without_items() -> None:
    assert scan_sections("nothing to see") is None


def test_normalize_is_idempotent_on_serialized_results() -> None:
    first = normalize(json.dumps({
        "uxInsights": ["a", "b"],
        "visualDesign": ["c"],
        "bestPractices": [],
        "annotations": [{"x": 1.5, "y": 2, "width": 3, "height": 4, "text": "note"}],
    }))
    second = normalize(first.to_json())
    assert second == first


def test_text_results_are_stable_when_reserialized() -> None:
    first = normalize("UX\n- One\nDesign\n- Two")
    assert normalize(first.to_json()) == first


def test_sections_enum_names_result_fields() -> None:
    for section in Section:
        assert section.value in AnalysisResult.model_fields
