"""
Service layer for business logic.
"""
from .consensus_service import ConsensusAnalyzer, merge_analysis_results
from .highlight_service import highlight_mistakes, highlight_conversation
from .comparison_service import build_dimension_changes
from .export_service import (
    export_analysis_json,
    load_analysis_json,
    format_result_as_markdown,
)

__all__ = [
    "ConsensusAnalyzer",
    "merge_analysis_results",
    "highlight_mistakes",
    "highlight_conversation",
    "build_dimension_changes",
    "export_analysis_json",
    "load_analysis_json",
    "format_result_as_markdown",
]
