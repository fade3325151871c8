"""
Export of analysis reports for download.
"""
import json

from src.config import CONSENSUS_RUNS
from src.models.analysis import AnalysisResult
from src.services.highlight_service import highlight_conversation


def export_analysis_json(result: AnalysisResult) -> str:
    """Serialize a report as pretty-printed JSON, fields in data-model order."""
    return json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False)


def load_analysis_json(document: str) -> AnalysisResult:
    """Read back a report written by export_analysis_json."""
    return AnalysisResult.model_validate_json(document)


def format_result_as_markdown(result: AnalysisResult, runs: int = CONSENSUS_RUNS) -> str:
    """Format the analysis result as a Markdown document."""
    lines = []

    lines.append("# Analysis Report")
    lines.append("")

    # Overall score
    lines.append("## Overall Score")
    lines.append("")
    lines.append(f"**{result.overallScore:.2f}/5** _(context-weighted score, avg. of {runs} runs)_")
    lines.append("")

    # Dimensions
    lines.append("## Dimension Analysis")
    lines.append("")
    for dimension in result.dimensionAnalysis:
        lines.append(f"- {dimension.name}: **{dimension.score:.1f}/5**")
    lines.append("")

    # Feedback
    lines.append("## Actionable Feedback")
    lines.append("")
    if result.feedback:
        for item in result.feedback:
            lines.append(f"- {item}")
    else:
        lines.append("_No feedback provided._")
    lines.append("")

    # Filler words are only shown when the user used any
    if result.fillerWords:
        lines.append("## Filler Word Usage")
        lines.append("")
        for usage in result.fillerWords:
            lines.append(f"- **{usage.word}**: {usage.count} times")
        lines.append("")

    # Transcript
    lines.append("## Conversation Transcript")
    lines.append("")
    notes = []
    for turn in highlight_conversation(result):
        rendered = []
        for span in turn.spans:
            if span.is_flagged:
                notes.append(span.mistake)
                rendered.append(f"**{span.text}**[^{len(notes)}]")
            else:
                rendered.append(span.text)
        lines.append(f"**{turn.speaker}:** {''.join(rendered)}")
        lines.append("")

    for index, mistake in enumerate(notes, 1):
        lines.append(f'[^{index}]: Correction: "{mistake.correction}". {mistake.explanation}')

    return "\n".join(lines).rstrip() + "\n"
