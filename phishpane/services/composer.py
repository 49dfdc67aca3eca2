"""Request composition."""

from phishpane.schemas.email import AnalysisRequest, EmailSnapshot


def compose_content(snapshot: EmailSnapshot) -> str:
    """Compose the single text blob the analysis server parses.

    Layout is fixed: sender line, subject line, blank line, body. The server
    derives its subject/sender echoes from these lines. No escaping.
    """
    return f"From: {snapshot.sender}\nSubject: {snapshot.subject}\n\n{snapshot.body_text}"


def compose_request(snapshot: EmailSnapshot, use_claude: bool) -> AnalysisRequest:
    """Package a snapshot and the backend mode flag into an AnalysisRequest."""
    return AnalysisRequest(mode=use_claude, content=compose_content(snapshot))
