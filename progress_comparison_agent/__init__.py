"""
Progress Comparison Agent for describing improvement between two speech analyses.
"""
from .agent import compare_analyses

__all__ = ["compare_analyses"]
