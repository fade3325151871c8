"""
Mistake highlighting for transcript turns.

Splits a turn's text into alternating plain and flagged spans so the UI can
overlay each flagged phrase with its correction and explanation.
"""
import logging
import re
from typing import Optional, Sequence

from src.models.analysis import AnalysisResult, Mistake
from src.models.highlight import HighlightedTurn, Span

logger = logging.getLogger(__name__)


def build_mistake_pattern(mistakes: Sequence[Mistake]) -> tuple[Optional[re.Pattern], list[Mistake]]:
    """
    Compile one case-insensitive alternation over the mistake phrases.

    Phrases are escaped so every character matches literally. Empty phrases are
    skipped, as are repeated phrases (case-insensitively) so that the first
    declared mistake owns a phrase.

    Returns:
        (pattern, group_mistakes) where group_mistakes[i] is the mistake for
        capture group i + 1, or (None, []) when nothing can match.
    """
    group_mistakes: list[Mistake] = []
    alternatives: list[str] = []
    seen: set[str] = set()

    for mistake in mistakes:
        phrase = mistake.incorrectPhrase
        if not phrase:
            continue
        key = phrase.lower()
        if key in seen:
            continue
        seen.add(key)
        alternatives.append(f"({re.escape(phrase)})")
        group_mistakes.append(mistake)

    if not alternatives:
        return None, []

    return re.compile("|".join(alternatives), re.IGNORECASE), group_mistakes


def highlight_mistakes(text: str, mistakes: Optional[Sequence[Mistake]] = None) -> list[Span]:
    """
    Partition text into plain and flagged spans.

    Matching is literal, case-insensitive, left to right and non-overlapping.
    When several phrases match at the same position the one declared first
    wins. Concatenating the span texts gives back the original text.

    Args:
        text: The turn text
        mistakes: Flagged phrases for this turn (may be empty or None)

    Returns:
        Ordered list of spans, empty spans removed
    """
    if not mistakes:
        return [Span(text=text)]

    pattern, group_mistakes = build_mistake_pattern(mistakes)
    if pattern is None:
        logger.debug("No usable mistake phrases, returning text unhighlighted")
        return [Span(text=text)]

    spans: list[Span] = []
    cursor = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if start > cursor:
            spans.append(Span(text=text[cursor:start]))
        spans.append(Span(text=match.group(0), mistake=group_mistakes[match.lastindex - 1]))
        cursor = end

    if cursor < len(text):
        spans.append(Span(text=text[cursor:]))

    return spans


def highlight_conversation(result: AnalysisResult) -> list[HighlightedTurn]:
    """Highlight every User turn of a report. AI turns stay a single plain span."""
    turns = []
    for turn in result.conversation:
        if turn.speaker == "User":
            spans = highlight_mistakes(turn.text, turn.mistakes)
        else:
            spans = [Span(text=turn.text)]
        turns.append(HighlightedTurn(speaker=turn.speaker, text=turn.text, spans=spans))
    return turns
