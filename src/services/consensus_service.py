"""
Consensus aggregation of repeated speech analyses.

Model scores are noisy between calls, so the same recording is analyzed
several times concurrently and the numeric scores are averaged. Qualitative
content (feedback, filler words, transcript) comes from the first run.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from google import genai

from speech_analysis_agent import analyze_audio, create_client
from src.config import AnalyzerConfig, SCORE_DECIMALS
from src.exceptions import AnalysisCallError
from src.models.analysis import AnalysisResult, Dimension

logger = logging.getLogger(__name__)

AnalyzeFn = Callable[[bytes, str, AnalyzerConfig, genai.Client], Awaitable[AnalysisResult]]


def _mean(values: Sequence[float], count: int) -> float:
    return round(sum(values) / count, SCORE_DECIMALS)


def merge_analysis_results(results: Sequence[AnalysisResult]) -> AnalysisResult:
    """
    Merge N analysis runs into one report.

    overallScore and each dimension score are averaged over all runs and
    rounded to two decimals. Dimensions follow the first run's names and order;
    a run without a given dimension contributes 0 to its average. Feedback,
    filler words and conversation are taken verbatim from the first run.

    Raises:
        ValueError: If results is empty
    """
    if not results:
        raise ValueError("Cannot merge an empty list of analysis results")

    runs = len(results)
    first = results[0]

    overall = _mean([r.overallScore for r in results], runs)

    dimensions = []
    for dimension in first.dimensionAnalysis:
        scores = []
        for index, run in enumerate(results):
            score = run.dimension_score(dimension.name)
            if score is None:
                logger.warning(f"[CONSENSUS] Run {index} has no dimension '{dimension.name}', counting it as 0")
                score = 0.0
            scores.append(score)
        dimensions.append(Dimension(name=dimension.name, score=_mean(scores, runs)))

    return AnalysisResult(
        overallScore=overall,
        dimensionAnalysis=dimensions,
        feedback=first.feedback,
        fillerWords=first.fillerWords,
        conversation=first.conversation,
    )


class ConsensusAnalyzer:
    """Runs the speech analysis several times and merges the runs."""

    def __init__(
        self,
        config: AnalyzerConfig,
        client: Optional[genai.Client] = None,
        analyze_fn: AnalyzeFn = analyze_audio,
    ):
        self.config = config
        self._client = client
        self._analyze_fn = analyze_fn

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = create_client(self.config)
        return self._client

    @property
    def runs(self) -> int:
        return self.config.consensus_runs

    async def analyze(self, audio_data: bytes, mime_type: str) -> AnalysisResult:
        """
        Analyze a recording `runs` times concurrently and merge the results.

        All runs must succeed. The first failure aborts the aggregation and is
        raised to the caller; runs still in flight finish on their own and
        their results are discarded.

        Raises:
            AnalysisCallError: If any run fails (including ValidationError)
        """
        logger.info("=" * 60)
        logger.info(f"[CONSENSUS] Starting {self.runs} analysis runs")
        logger.info("=" * 60)

        client = self.client
        tasks = [
            self._analyze_fn(audio_data, mime_type, self.config, client)
            for _ in range(self.runs)
        ]

        try:
            results = await asyncio.gather(*tasks)
        except AnalysisCallError as e:
            logger.error(f"[CONSENSUS] Analysis run failed, aborting: {e.message}")
            raise
        except Exception as e:
            logger.exception("[CONSENSUS] Unexpected error during analysis runs")
            raise AnalysisCallError(f"Failed to analyze audio: {e}") from e

        merged = merge_analysis_results(results)
        logger.info(
            f"[CONSENSUS] Merged {len(results)} runs — overall: {merged.overallScore} "
            f"(runs: {', '.join(str(r.overallScore) for r in results)})"
        )
        return merged
