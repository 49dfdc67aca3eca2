"""Schema module for pipeline data models."""

from phishpane.schemas.analysis import (
    AnalysisResponse,
    EmailDetails,
    ErrorBody,
    LinkInfo,
)
from phishpane.schemas.email import AnalysisRequest, EmailSnapshot
from phishpane.schemas.presentation import RiskBand, RiskPresentation

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "EmailDetails",
    "EmailSnapshot",
    "ErrorBody",
    "LinkInfo",
    "RiskBand",
    "RiskPresentation",
]
