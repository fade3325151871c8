"""
Speech analysis models.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Analysis Result (camelCase to match frontend/export contract)
# =============================================================================

class Dimension(BaseModel):
    """A named communication-skill axis with its 0-5 score."""
    model_config = ConfigDict(frozen=True)

    name: str
    score: float = Field(..., ge=0.0, le=5.0)


class Mistake(BaseModel):
    """One flagged phrase within a User turn."""
    model_config = ConfigDict(frozen=True)

    incorrectPhrase: str
    correction: str
    explanation: str


class ConversationTurn(BaseModel):
    """A single transcript turn. Only User turns carry mistakes."""
    model_config = ConfigDict(frozen=True)

    speaker: Literal["User", "AI"]
    text: str
    mistakes: list[Mistake] = Field(default_factory=list)

    @field_validator("mistakes", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # The model omits or nulls the array when a turn has no mistakes
        return [] if value is None else value


class FillerWordUsage(BaseModel):
    """How often the user said a filler word."""
    model_config = ConfigDict(frozen=True)

    word: str
    count: int = Field(..., ge=0)


class AnalysisResult(BaseModel):
    """Full communication-skill report for one conversation."""
    model_config = ConfigDict(frozen=True)

    overallScore: float = Field(..., ge=0.0, le=5.0)
    dimensionAnalysis: list[Dimension]
    feedback: list[str]
    fillerWords: list[FillerWordUsage]
    conversation: list[ConversationTurn]

    @field_validator("dimensionAnalysis")
    @classmethod
    def _unique_dimension_names(cls, value: list[Dimension]) -> list[Dimension]:
        seen = set()
        for dimension in value:
            if dimension.name in seen:
                raise ValueError(f"Duplicate dimension name: {dimension.name}")
            seen.add(dimension.name)
        return value

    def dimension_score(self, name: str) -> Optional[float]:
        """Score of the named dimension, or None when absent."""
        for dimension in self.dimensionAnalysis:
            if dimension.name == name:
                return dimension.score
        return None


# =============================================================================
# Comparison Models
# =============================================================================

class DimensionChange(BaseModel):
    """Score movement of one dimension between two reports."""
    name: str
    oldScore: float
    newScore: float


class ComparisonResult(BaseModel):
    """Progress between a previous and a current report."""
    dimensionChanges: list[DimensionChange]
    improvementSummary: list[str]
    areasForNextFocus: list[str]


# =============================================================================
# Request / Response Models
# =============================================================================

class ComparisonRequest(BaseModel):
    """Request model for comparing two analysis reports."""
    previous: AnalysisResult
    current: AnalysisResult
