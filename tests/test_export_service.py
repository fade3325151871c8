"""
Tests for report export (JSON download and Markdown report).
"""
import json

from src.services.export_service import (
    export_analysis_json,
    format_result_as_markdown,
    load_analysis_json,
)
from tests.configs import make_result


def test_json_export_is_pretty_and_ordered(sample_result):
    document = export_analysis_json(sample_result)

    assert document.startswith('{\n  "overallScore"')
    assert list(json.loads(document).keys()) == [
        "overallScore", "dimensionAnalysis", "feedback", "fillerWords", "conversation",
    ]


def test_json_export_round_trips(sample_result):
    assert load_analysis_json(export_analysis_json(sample_result)) == sample_result


def test_markdown_report_contains_scores_and_corrections():
    report = format_result_as_markdown(make_result(3.456, {"Clarity in speaking": 2.5}), runs=3)

    assert "**3.46/5**" in report
    assert "avg. of 3 runs" in report
    assert "- Clarity in speaking: **2.5/5**" in report
    assert "**I seen**[^1]" in report
    assert '[^1]: Correction: "I saw". past tense' in report
    assert "- **um**: 4 times" in report


def test_markdown_report_skips_filler_section_when_empty():
    result = make_result().model_copy(update={"fillerWords": []})

    report = format_result_as_markdown(result)

    assert "Filler Word Usage" not in report
