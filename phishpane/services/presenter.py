"""Risk presentation.

Turns an untrusted AnalysisResponse into a bounded, escaped RiskPresentation.
Truncation limits are display policy and live here as constants.
"""

import re
from html import escape

from phishpane.errors import InvalidResponseError
from phishpane.schemas.analysis import AnalysisResponse
from phishpane.schemas.presentation import RiskBand, RiskPresentation

# Band thresholds; each is the inclusive lower edge of the next band
MEDIUM_RISK_THRESHOLD = 30
HIGH_RISK_THRESHOLD = 60

MAX_NARRATIVE_PARAGRAPHS = 2
MAX_KEYWORDS = 3
MAX_LINK_ISSUES = 2
MAX_DISPLAYED_LINKS = 1

# Server wording for "nothing wrong with the sender" (case-sensitive)
BENIGN_SENDER_PHRASES = ("No obvious", "No sender issues")

SENDER_GLYPH = "👤"
KEYWORD_GLYPH = "🔑"
LINK_GLYPH = "🔗"
NO_RED_FLAGS_SENTINEL = "✅ No major red flags detected"

BAND_LABELS = {
    RiskBand.LOW: "✅ Low Risk - Appears legitimate",
    RiskBand.MEDIUM: "⚠️ Medium Risk - Exercise caution",
    RiskBand.HIGH: "🚨 High Risk - Likely phishing",
}

_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t\r]*\n")


def escape_text(text: str) -> str:
    """Neutralize markup-significant characters for HTML embedding."""
    return escape(text, quote=True)


def classify_band(score: int) -> RiskBand:
    """Map a confidence score to its risk band."""
    if score < MEDIUM_RISK_THRESHOLD:
        return RiskBand.LOW
    if score < HIGH_RISK_THRESHOLD:
        return RiskBand.MEDIUM
    return RiskBand.HIGH


def split_narrative(narrative: str, limit: int = MAX_NARRATIVE_PARAGRAPHS) -> list[str]:
    """Split the narrative on blank lines and keep the first `limit` paragraphs.

    Later paragraphs are dropped. Returned paragraphs are not yet escaped.
    """
    # Whitespace-only lines count as separators and empty pieces are skipped,
    # so extra blank lines never produce an empty paragraph.
    paragraphs = [p.strip() for p in _PARAGRAPH_BREAK_RE.split(narrative)]
    return [p for p in paragraphs if p][:limit]


def is_benign_sender_note(issue: str) -> bool:
    return any(phrase in issue for phrase in BENIGN_SENDER_PHRASES)


def build_flags(response: AnalysisResponse) -> list[str]:
    """Build the unescaped red-flag list in precedence order.

    Sender issues first, then at most one keyword flag, then at most
    MAX_LINK_ISSUES link issues. Returns [] when nothing qualifies.
    """
    flags = [
        f"{SENDER_GLYPH} {issue}"
        for issue in response.sender_analysis
        if not is_benign_sender_note(issue)
    ]

    top_keywords = response.suspicious_keywords[:MAX_KEYWORDS]
    if top_keywords:
        flags.append(f"{KEYWORD_GLYPH} Suspicious keywords: {', '.join(top_keywords)}")

    for issue in response.link_analysis[:MAX_LINK_ISSUES]:
        flags.append(f"{LINK_GLYPH} {issue}")

    return flags


def build_detail_summary(response: AnalysisResponse) -> str:
    """Render the email details block as an HTML fragment.

    Subject and sender echoes are always present. The link line reads "None"
    for no links; otherwise it shows the count followed by the first
    MAX_DISPLAYED_LINKS URLs, each on its own highlighted line.
    """
    lines = [
        f"<p><strong>Subject:</strong><br>{escape_text(response.subject_echo)}</p>",
        f"<p><strong>From:</strong><br>{escape_text(response.sender_echo)}</p>",
    ]
    links = response.links
    if links:
        lines.append(f"<p><strong>Links Found:</strong> {len(links)}</p>")
        for link in links[:MAX_DISPLAYED_LINKS]:
            lines.append(f'<div class="link-preview">{escape_text(link.url)}</div>')
    else:
        lines.append("<p><strong>Links Found:</strong> None</p>")
    return "\n".join(lines)


def build_presentation(response: AnalysisResponse) -> RiskPresentation:
    """Build the full presentation for one response.

    Args:
        response: Validated analysis response

    Returns:
        Escaped, bounded presentation model

    Raises:
        InvalidResponseError: If the response carries no confidence score
    """
    score = response.confidence_score
    if score is None:
        raise InvalidResponseError()

    band = classify_band(score)
    flags = build_flags(response)
    has_red_flags = bool(flags)
    if not has_red_flags:
        flags = [NO_RED_FLAGS_SENTINEL]

    return RiskPresentation(
        score_percent=score,
        band=band,
        band_label=BAND_LABELS[band],
        narrative_paragraphs=tuple(
            escape_text(p) for p in split_narrative(response.analysis)
        ),
        flags=tuple(escape_text(flag) for flag in flags),
        has_red_flags=has_red_flags,
        detail_summary=build_detail_summary(response),
    )
