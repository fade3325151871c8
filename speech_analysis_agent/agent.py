"""
Speech Analysis Agent for evaluating a user's communication skills.

Sends a recorded conversation between a User and an AI to Gemini and returns
a structured report:
- Overall context-weighted score (0-5)
- Per-dimension scores
- Actionable feedback points
- Filler word counts
- Turn-by-turn transcript with mistakes flagged on the User's turns
"""

from google import genai
from google.genai import types
from pydantic import ValidationError as PydanticValidationError
from typing import Optional
import json
import logging
import re

from src.config import AnalyzerConfig
from src.exceptions import AnalysisCallError, ValidationError
from src.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)


# =============================================================================
# Agent Instruction
# =============================================================================

DIMENSIONS = [
    "Clarity in speaking",
    "Grasping and then answering",
    "Understanding",
    "Language Proficiency",
    "Conciseness",
    "Speaking up to the topic",
]

REQUIRED_FIELDS = ["overallScore", "dimensionAnalysis", "feedback", "fillerWords", "conversation"]

INSTRUCTION = """You are an expert communication coach with a PhD in linguistics. Analyze the provided audio file of a conversation between a 'User' and an 'AI', focusing exclusively on the User's speech.

Your analysis must be a deep, multi-faceted evaluation of their communication skills. Your entire output must be a single JSON object conforming to the provided schema.

1. **Overall Score**: Provide a single, context-weighted overall score from 0.0 to 5.0.

2. **Dimension Analysis**: Evaluate the user across the following {dimension_count} dimensions. For each, provide an overall score from 0.0 to 5.0.
{dimension_list}

3. **Conversation Transcript**: Provide a full, turn-by-turn transcript of the entire conversation. For each turn, specify the speaker ('User' or 'AI') and the text.
    * **Mistake Highlighting**: For the User's turns ONLY, identify any grammatical errors, awkward phrasing, or idiomatic mistakes. For each mistake, specify the exact `incorrectPhrase` as it appears in the turn text, a suggested `correction`, and a brief `explanation`. If there are no mistakes in a turn, the `mistakes` array should be empty.

4. **Actionable Feedback**: Provide a list of 5-10 specific, bullet-point style feedback items for improvement based on your analysis.

5. **Filler Words**: Identify the top 3-5 most frequently used filler words (e.g., 'um', 'uh', 'like') and provide a count for each. If none are used, return an empty array.

Analyze the audio and return only the structured JSON.
"""


def build_instruction(dimensions: Optional[list[str]] = None) -> str:
    """Render the coaching instruction for the given dimension names."""
    dimensions = dimensions or DIMENSIONS
    return INSTRUCTION.format(
        dimension_count=len(dimensions),
        dimension_list="\n".join(f"    * {name}" for name in dimensions),
    )


# =============================================================================
# Response Schema
# =============================================================================

MISTAKE_SCHEMA = {
    "type": types.Type.OBJECT,
    "properties": {
        "incorrectPhrase": {"type": types.Type.STRING, "description": "The exact phrase from the text that is incorrect."},
        "correction": {"type": types.Type.STRING, "description": "The suggested correction for the phrase."},
        "explanation": {"type": types.Type.STRING, "description": "A brief explanation of the mistake."},
    },
    "required": ["incorrectPhrase", "correction", "explanation"],
}

ANALYSIS_SCHEMA = {
    "type": types.Type.OBJECT,
    "properties": {
        "overallScore": {
            "type": types.Type.NUMBER,
            "description": "The single, overall context-weighted score from 0 to 5. Can be a decimal.",
        },
        "dimensionAnalysis": {
            "type": types.Type.ARRAY,
            "description": "An array of performance dimensions, each with its own score.",
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "name": {"type": types.Type.STRING, "description": "Name of the dimension (e.g., 'Clarity in speaking')."},
                    "score": {"type": types.Type.NUMBER, "description": "Overall score for this dimension from 0 to 5."},
                },
                "required": ["name", "score"],
            },
        },
        "feedback": {
            "type": types.Type.ARRAY,
            "description": "Specific, actionable feedback points for the user to improve their communication skills.",
            "items": {"type": types.Type.STRING},
        },
        "fillerWords": {
            "type": types.Type.ARRAY,
            "description": "Filler words used by the user and the count of each. Empty array if none.",
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "word": {"type": types.Type.STRING, "description": "The filler word used (e.g., 'um', 'like')."},
                    "count": {"type": types.Type.INTEGER, "description": "How many times the filler word was used."},
                },
                "required": ["word", "count"],
            },
        },
        "conversation": {
            "type": types.Type.ARRAY,
            "description": "A turn-by-turn transcript of the conversation.",
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "speaker": {"type": types.Type.STRING, "enum": ["User", "AI"]},
                    "text": {"type": types.Type.STRING, "description": "The transcribed text for this turn."},
                    "mistakes": {
                        "type": types.Type.ARRAY,
                        "description": "Mistakes in the user's speech for this turn. Empty if no mistakes.",
                        "items": MISTAKE_SCHEMA,
                    },
                },
                "required": ["speaker", "text"],
            },
        },
    },
    "required": REQUIRED_FIELDS,
}


# =============================================================================
# Helper Functions
# =============================================================================

def create_client(config: AnalyzerConfig) -> genai.Client:
    """Create a Gemini client from an explicit configuration."""
    return genai.Client(api_key=config.api_key)


def build_generate_config(config: AnalyzerConfig, response_schema: dict) -> types.GenerateContentConfig:
    """JSON-mode generation config shared by the analysis agents."""
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=response_schema,
        temperature=config.temperature,
    )


def extract_json(response_text: str) -> dict:
    """
    Parse JSON from the model response, handling markdown code blocks.

    JSON-mode responses are parsed as-is; code block or brace extraction is
    only tried when the text is not bare JSON.

    Raises:
        ValidationError: If no JSON object can be decoded
    """
    try:
        data = json.loads(response_text)
    except json.JSONDecodeError:
        data = _extract_embedded_json(response_text)

    if not isinstance(data, dict):
        raise ValidationError("Invalid response structure from API. Expected a JSON object.")
    return data


def _extract_embedded_json(response_text: str):
    """Decode JSON wrapped in a markdown code block or surrounding prose."""
    json_match = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', response_text)
    if json_match:
        json_str = json_match.group(1)
    else:
        json_match = re.search(r'\{[\s\S]*\}', response_text)
        if json_match:
            json_str = json_match.group(0)
        else:
            logger.error(f"Could not find JSON in response: {response_text[:500]}")
            raise ValidationError("Invalid response structure from API. No JSON object found.")

    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON: {e}\nJSON string: {json_str[:500]}")
        raise ValidationError(f"Invalid response structure from API. {e}")


def parse_analysis_response(response_text: str) -> AnalysisResult:
    """
    Strictly decode a model response into an AnalysisResult.

    Raises:
        ValidationError: On missing required fields or malformed values
    """
    data = extract_json(response_text)

    missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
    if missing:
        raise ValidationError(
            f"Invalid response structure from API. Missing required fields: {', '.join(missing)}",
            field=missing[0],
            details={"missing": missing},
        )

    try:
        return AnalysisResult.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"Analysis response failed validation: {e}")
        raise ValidationError(
            f"Invalid response structure from API. {e.error_count()} invalid field(s)",
            details={"errors": [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]},
        )


# =============================================================================
# Main Analysis Function
# =============================================================================

async def analyze_audio(
    audio_data: bytes,
    mime_type: str,
    config: AnalyzerConfig,
    client: Optional[genai.Client] = None,
) -> AnalysisResult:
    """
    Run one analysis of a conversation recording.

    Args:
        audio_data: Raw audio bytes (not base64 encoded)
        mime_type: MIME type of the recording, e.g. "audio/mpeg"
        config: Model and credential settings
        client: Gemini client, created from config when omitted

    Returns:
        AnalysisResult for this single run

    Raises:
        AnalysisCallError: If the model call fails
        ValidationError: If the response is missing fields or malformed
    """
    client = client or create_client(config)

    logger.info(f"[SPEECH ANALYSIS] Starting — model: {config.model}, audio: {len(audio_data)} bytes ({mime_type})")

    contents = types.Content(
        role="user",
        parts=[
            types.Part(inline_data=types.Blob(mime_type=mime_type, data=audio_data)),
            types.Part(text=build_instruction()),
        ],
    )

    try:
        response = await client.aio.models.generate_content(
            model=config.model,
            contents=contents,
            config=build_generate_config(config, ANALYSIS_SCHEMA),
        )
    except Exception as e:
        logger.error(f"Error analyzing audio with Gemini API: {e}")
        raise AnalysisCallError(f"Failed to analyze audio: {e}") from e

    response_text = (response.text or "").strip()
    logger.debug(f"Raw response: {response_text[:500]}...")

    result = parse_analysis_response(response_text)
    logger.info(
        f"[SPEECH ANALYSIS] Done — overall: {result.overallScore}, "
        f"dimensions: {len(result.dimensionAnalysis)}, turns: {len(result.conversation)}"
    )
    return result
