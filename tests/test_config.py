"""
Tests for analyzer configuration loading.
"""
import pytest

from src.config import CONSENSUS_RUNS, DEFAULT_MODEL, AnalyzerConfig
from src.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY", "RATEMYSPEAK_MODEL", "RATEMYSPEAK_CONSENSUS_RUNS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env_defaults(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "secret")

    config = AnalyzerConfig.from_env()

    assert config.api_key == "secret"
    assert config.model == DEFAULT_MODEL
    assert config.consensus_runs == CONSENSUS_RUNS == 3


def test_from_env_falls_back_to_api_key(clean_env):
    clean_env.setenv("API_KEY", "legacy")

    assert AnalyzerConfig.from_env().api_key == "legacy"


def test_from_env_overrides(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "secret")
    clean_env.setenv("RATEMYSPEAK_MODEL", "gemini-2.5-flash")
    clean_env.setenv("RATEMYSPEAK_CONSENSUS_RUNS", "5")

    config = AnalyzerConfig.from_env()

    assert config.model == "gemini-2.5-flash"
    assert config.consensus_runs == 5


def test_missing_key_raises(clean_env):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_env()


@pytest.mark.parametrize("runs", ["0", "-1", "three"])
def test_invalid_run_count_raises(clean_env, runs):
    clean_env.setenv("GEMINI_API_KEY", "secret")
    clean_env.setenv("RATEMYSPEAK_CONSENSUS_RUNS", runs)

    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_env()
