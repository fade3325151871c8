"""
Speech Analysis Router.

Upload a conversation recording and get a consensus communication-skill
report, highlight mistakes in a piece of text, export a report for download,
and compare two reports.
"""
import logging
import mimetypes
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from progress_comparison_agent import compare_analyses
from src.config import ALLOWED_AUDIO_PREFIX, CONSENSUS_RUNS, EXPORT_FILENAME, MARKDOWN_EXPORT_FILENAME
from src.dependencies import get_consensus_analyzer, get_optional_analyzer
from src.models.analysis import AnalysisResult, ComparisonRequest, ComparisonResult
from src.models.highlight import AnalysisResponse, HighlightRequest, HighlightResponse
from src.services import (
    ConsensusAnalyzer,
    export_analysis_json,
    format_result_as_markdown,
    highlight_conversation,
    highlight_mistakes,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["Speech Analysis"])


def _resolve_mime_type(audio: UploadFile) -> str:
    """Use the declared content type, falling back to a guess from the filename."""
    mime_type = audio.content_type
    if not mime_type or mime_type == "application/octet-stream":
        mime_type, _ = mimetypes.guess_type(audio.filename or "")
    return mime_type or ""


@router.post("", response_model=AnalysisResponse)
async def analyze_audio_endpoint(
    audio: UploadFile = File(...),
    analyzer: ConsensusAnalyzer = Depends(get_consensus_analyzer),
):
    """
    Analyze an uploaded conversation recording.

    The recording is analyzed several times and the scores are averaged.
    The response includes the merged report and the transcript split into
    highlighted spans.
    """
    mime_type = _resolve_mime_type(audio)
    if not mime_type.startswith(ALLOWED_AUDIO_PREFIX):
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {mime_type or 'unknown'}. Please upload an audio file.")

    audio_data = await audio.read()
    if not audio_data:
        raise HTTPException(status_code=400, detail="Uploaded audio file is empty")

    logger.info(f"[ANALYSIS] Received {audio.filename} ({len(audio_data)} bytes, {mime_type})")

    result = await analyzer.analyze(audio_data, mime_type)

    return AnalysisResponse(
        result=result,
        highlightedConversation=highlight_conversation(result),
        runs=analyzer.runs,
    )


@router.post("/highlight", response_model=HighlightResponse)
async def highlight_endpoint(request: HighlightRequest):
    """Split text into plain and flagged spans for the given mistakes."""
    return HighlightResponse(spans=highlight_mistakes(request.text, request.mistakes))


@router.post("/export")
async def export_endpoint(
    result: AnalysisResult,
    export_format: Literal["json", "markdown"] = Query("json", alias="format"),
    runs: Optional[int] = Query(None, ge=1),
    analyzer: Optional[ConsensusAnalyzer] = Depends(get_optional_analyzer),
):
    """
    Return the report as a downloadable JSON or Markdown file.

    The Markdown report states how many runs were averaged: the `runs` query
    parameter when given, otherwise the configured analyzer's run count.
    """
    if export_format == "markdown":
        if runs is None:
            runs = analyzer.runs if analyzer is not None else CONSENSUS_RUNS
        content = format_result_as_markdown(result, runs=runs)
        media_type = "text/markdown"
        filename = MARKDOWN_EXPORT_FILENAME
    else:
        content = export_analysis_json(result)
        media_type = "application/json"
        filename = EXPORT_FILENAME

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/compare", response_model=ComparisonResult)
async def compare_endpoint(
    request: ComparisonRequest,
    analyzer: ConsensusAnalyzer = Depends(get_consensus_analyzer),
):
    """Describe progress between a previous and a current report."""
    return await compare_analyses(
        previous=request.previous,
        current=request.current,
        config=analyzer.config,
        client=analyzer.client,
    )
