"""
Speech Analysis Agent for scoring a user's communication skills from conversation audio.

This module provides functionality to:
1. Send a conversation recording to Gemini with a fixed coaching instruction
2. Constrain the answer to the analysis JSON schema
3. Strictly decode the answer into an AnalysisResult
"""

from .agent import (
    analyze_audio,
    parse_analysis_response,
    extract_json,
    create_client,
    build_instruction,
    ANALYSIS_SCHEMA,
    DIMENSIONS,
)

__all__ = [
    "analyze_audio",
    "parse_analysis_response",
    "extract_json",
    "create_client",
    "build_instruction",
    "ANALYSIS_SCHEMA",
    "DIMENSIONS",
]
