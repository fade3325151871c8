"""
Score movement between two analysis reports.
"""
from src.models.analysis import AnalysisResult, DimensionChange


def build_dimension_changes(previous: AnalysisResult, current: AnalysisResult) -> list[DimensionChange]:
    """
    One change entry per dimension of the current report, in its order.

    A dimension the previous report did not score starts from 0.
    """
    changes = []
    for dimension in current.dimensionAnalysis:
        old_score = previous.dimension_score(dimension.name)
        changes.append(DimensionChange(
            name=dimension.name,
            oldScore=old_score if old_score is not None else 0.0,
            newScore=dimension.score,
        ))
    return changes
