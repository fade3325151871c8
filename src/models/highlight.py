"""
Transcript highlighting models.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

from .analysis import AnalysisResult, Mistake


class Span(BaseModel):
    """Contiguous piece of turn text, flagged when it carries a mistake."""
    text: str
    mistake: Optional[Mistake] = None

    @property
    def is_flagged(self) -> bool:
        return self.mistake is not None


class HighlightedTurn(BaseModel):
    """A transcript turn split into spans for rendering."""
    speaker: Literal["User", "AI"]
    text: str
    spans: list[Span]


class HighlightRequest(BaseModel):
    """Request model for highlighting a single piece of text."""
    text: str
    mistakes: list[Mistake] = Field(default_factory=list)


class HighlightResponse(BaseModel):
    """Spans of a highlighted piece of text, in order."""
    spans: list[Span]


class AnalysisResponse(BaseModel):
    """Response for an uploaded conversation: merged report plus highlighted transcript."""
    result: AnalysisResult
    highlightedConversation: list[HighlightedTurn]
    runs: int
