"""
FastAPI dependency injection factories.

The analyzer is created once during app startup and stored on app.state;
routers get it through these dependencies.
"""
from typing import Optional

from fastapi import Request

from src.exceptions import ConfigurationError
from src.services import ConsensusAnalyzer


def get_consensus_analyzer(request: Request) -> ConsensusAnalyzer:
    """Get the consensus analyzer set up during app startup."""
    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is None:
        raise ConfigurationError("Analyzer not configured. Set GEMINI_API_KEY and restart the service.")
    return analyzer


def get_optional_analyzer(request: Request) -> Optional[ConsensusAnalyzer]:
    """Get the consensus analyzer if one was configured, else None."""
    return getattr(request.app.state, "analyzer", None)
