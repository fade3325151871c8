"""
RateMySpeak API Models.

This module re-exports all model classes for convenient importing.
"""

# Analysis models
from .analysis import (
    Dimension,
    Mistake,
    ConversationTurn,
    FillerWordUsage,
    AnalysisResult,
    DimensionChange,
    ComparisonResult,
    ComparisonRequest,
)

# Highlight models
from .highlight import (
    Span,
    HighlightedTurn,
    HighlightRequest,
    HighlightResponse,
    AnalysisResponse,
)

__all__ = [
    # Analysis
    "Dimension",
    "Mistake",
    "ConversationTurn",
    "FillerWordUsage",
    "AnalysisResult",
    "DimensionChange",
    "ComparisonResult",
    "ComparisonRequest",
    # Highlight
    "Span",
    "HighlightedTurn",
    "HighlightRequest",
    "HighlightResponse",
    "AnalysisResponse",
]
