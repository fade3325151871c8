"""
Configuration module for the RateMySpeak backend.
Centralizes environment variables, logging setup, and constants.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from src.exceptions import ConfigurationError

# Load .env file for local development
load_dotenv()

# ============================================================================
# Environment Configuration
# ============================================================================

# Environment identifier (production, staging, development, etc.)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================================================
# Application Constants
# ============================================================================

DEFAULT_MODEL = "gemini-2.5-pro"

# Number of independent analysis runs averaged into one report
CONSENSUS_RUNS = 3

# Decimal places kept on merged scores
SCORE_DECIMALS = 2

EXPORT_FILENAME = "RateMySpeak_analysis.json"
MARKDOWN_EXPORT_FILENAME = "RateMySpeak_analysis.md"

ALLOWED_AUDIO_PREFIX = "audio/"


# ============================================================================
# Analyzer Configuration
# ============================================================================

@dataclass
class AnalyzerConfig:
    """Settings for the Gemini analysis calls, owned by the caller."""
    api_key: str
    model: str = DEFAULT_MODEL
    consensus_runs: int = CONSENSUS_RUNS
    temperature: Optional[float] = None

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable not set")
        if self.consensus_runs < 1:
            raise ConfigurationError(
                f"consensus_runs must be a positive integer, got {self.consensus_runs}"
            )

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """
        Build the analyzer configuration from environment variables.

        Reads GEMINI_API_KEY (falls back to API_KEY), RATEMYSPEAK_MODEL and
        RATEMYSPEAK_CONSENSUS_RUNS.

        Raises:
            ConfigurationError: If the API key is missing or the run count is invalid
        """
        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or ""
        model = os.environ.get("RATEMYSPEAK_MODEL", DEFAULT_MODEL)

        raw_runs = os.environ.get("RATEMYSPEAK_CONSENSUS_RUNS", str(CONSENSUS_RUNS))
        try:
            consensus_runs = int(raw_runs)
        except ValueError:
            raise ConfigurationError(f"RATEMYSPEAK_CONSENSUS_RUNS must be an integer, got {raw_runs!r}")

        return cls(api_key=api_key, model=model, consensus_runs=consensus_runs)
