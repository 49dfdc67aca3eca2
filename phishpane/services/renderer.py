"""HTML rendering of the task-pane result section.

Presentation fields arrive escaped; they are inserted as-is.
"""

from html import escape

from phishpane.schemas.presentation import RiskBand, RiskPresentation

BADGE_CLASSES = {
    RiskBand.LOW: "badge-success",
    RiskBand.MEDIUM: "badge-warning",
    RiskBand.HIGH: "badge-danger",
}

SENTINEL_ITEM_STYLE = "background: #d1fae5; border-left-color: #10b981;"


def render_results_html(presentation: RiskPresentation) -> str:
    """Render a RiskPresentation as the results section markup."""
    score = presentation.score_percent
    badge = BADGE_CLASSES[presentation.band]

    paragraphs = "".join(f"<p>{p}</p>" for p in presentation.narrative_paragraphs)
    if presentation.has_red_flags:
        items = "".join(f"<li>{flag}</li>" for flag in presentation.flags)
    else:
        items = "".join(
            f'<li style="{SENTINEL_ITEM_STYLE}">{flag}</li>' for flag in presentation.flags
        )

    return "\n".join(
        [
            '<div id="results" class="active">',
            f'<div id="scoreValue">{score}%</div>',
            f'<div id="scoreBar" style="width: {score}%"></div>',
            f'<div id="scoreLabel"><span class="badge {badge}">'
            f"{presentation.band_label}</span></div>",
            f'<div id="analysisText">{paragraphs}</div>',
            f'<ul id="redFlags">{items}</ul>',
            f'<div id="emailDetails">{presentation.detail_summary}</div>',
            "</div>",
        ]
    )


def render_error_html(message: str) -> str:
    """Render an error message block. The message is escaped here."""
    return f'<div id="error" class="active">{escape(message)}</div>'
