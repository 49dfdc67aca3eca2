"""Presentation model built from an analysis response."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RiskBand(str, Enum):
    """Coarse risk category derived from the confidence score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskPresentation(BaseModel):
    """Display-ready view of one analysis result.

    All string fields are HTML-escaped; `detail_summary` is an HTML fragment.
    """

    model_config = ConfigDict(frozen=True)

    score_percent: int
    band: RiskBand
    band_label: str
    narrative_paragraphs: tuple[str, ...]
    flags: tuple[str, ...]
    has_red_flags: bool
    detail_summary: str
