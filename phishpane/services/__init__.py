"""Services package for the analysis pipeline."""

from phishpane.services.analysis_client import AnalysisClient
from phishpane.services.composer import compose_content, compose_request
from phishpane.services.extractor import extract_snapshot, format_identity
from phishpane.services.orchestrator import (
    AnalysisOrchestrator,
    PipelineState,
    PresentationSurface,
)
from phishpane.services.presenter import build_presentation, classify_band
from phishpane.services.renderer import render_error_html, render_results_html

__all__ = [
    "AnalysisClient",
    "AnalysisOrchestrator",
    "PipelineState",
    "PresentationSurface",
    "build_presentation",
    "classify_band",
    "compose_content",
    "compose_request",
    "extract_snapshot",
    "format_identity",
    "render_error_html",
    "render_results_html",
]
