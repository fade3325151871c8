"""
Progress Comparison Agent for tracking improvement between two speech analyses.

Score changes per dimension are computed locally; Gemini only writes the
qualitative part (what improved, what to focus on next).
"""

from google import genai
from google.genai import types
from typing import Optional
import logging

from speech_analysis_agent.agent import build_generate_config, create_client, extract_json
from src.config import AnalyzerConfig
from src.exceptions import AnalysisCallError, ValidationError
from src.models.analysis import AnalysisResult, ComparisonResult
from src.services.comparison_service import build_dimension_changes

logger = logging.getLogger(__name__)


INSTRUCTION = """You are an expert communication coach reviewing a learner's progress.

You receive two JSON analysis reports of the same learner: PREVIOUS (older) and CURRENT (newer), plus the per-dimension score changes between them.

Return a single JSON object with:
- improvementSummary: 3-5 short statements on what measurably improved, citing dimensions, mistakes or filler words that changed. If nothing improved, say so honestly.
- areasForNextFocus: 3-5 concrete, actionable focus points for the next practice session, based on the CURRENT report.

Return only the structured JSON."""

COMPARISON_SCHEMA = {
    "type": types.Type.OBJECT,
    "properties": {
        "improvementSummary": {"type": types.Type.ARRAY, "items": {"type": types.Type.STRING}},
        "areasForNextFocus": {"type": types.Type.ARRAY, "items": {"type": types.Type.STRING}},
    },
    "required": ["improvementSummary", "areasForNextFocus"],
}


def build_comparison_prompt(previous: AnalysisResult, current: AnalysisResult, changes_text: str) -> str:
    return f"""{INSTRUCTION}

## SCORE CHANGES
{changes_text}

## PREVIOUS
{previous.model_dump_json(indent=2)}

## CURRENT
{current.model_dump_json(indent=2)}"""


async def compare_analyses(
    previous: AnalysisResult,
    current: AnalysisResult,
    config: AnalyzerConfig,
    client: Optional[genai.Client] = None,
) -> ComparisonResult:
    """
    Compare two reports and describe the learner's progress.

    Raises:
        AnalysisCallError: If the model call fails
        ValidationError: If the response is malformed
    """
    client = client or create_client(config)
    changes = build_dimension_changes(previous, current)
    changes_text = "\n".join(f"- {c.name}: {c.oldScore:.2f} -> {c.newScore:.2f}" for c in changes)

    logger.info(f"[PROGRESS COMPARISON] Comparing reports — overall {previous.overallScore} -> {current.overallScore}")

    try:
        response = await client.aio.models.generate_content(
            model=config.model,
            contents=build_comparison_prompt(previous, current, changes_text),
            config=build_generate_config(config, COMPARISON_SCHEMA),
        )
    except Exception as e:
        logger.error(f"Error comparing analyses with Gemini API: {e}")
        raise AnalysisCallError(f"Failed to compare analyses: {e}") from e

    parsed = extract_json((response.text or "").strip())

    summary = parsed.get("improvementSummary")
    focus = parsed.get("areasForNextFocus")
    if not isinstance(summary, list) or not isinstance(focus, list):
        raise ValidationError("Invalid comparison response from API. Missing improvementSummary or areasForNextFocus.")

    return ComparisonResult(
        dimensionChanges=changes,
        improvementSummary=[str(item) for item in summary],
        areasForNextFocus=[str(item) for item in focus],
    )
