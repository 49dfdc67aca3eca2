"""Field extraction from the open message.

Reads subject, sender, and both body renditions through the host contract
and folds them into one EmailSnapshot.
"""

from typing import Optional

from phishpane.errors import BodyReadError
from phishpane.host import EmailIdentity, HostReadResult, MessageHandle
from phishpane.schemas.email import EmailSnapshot
from phishpane.utils.logging import get_logger

logger = get_logger(__name__)


def format_identity(identity: Optional[EmailIdentity]) -> str:
    """Format a host identity as "DisplayName <address>".

    Args:
        identity: Identity reported by the host, or None

    Returns:
        Formatted sender line, or "" when there is no identity
    """
    if identity is None:
        return ""
    display_name = identity.display_name or ""
    address = identity.address or ""
    return f"{display_name} <{address}>".strip()


def resolve_sender(message: MessageHandle) -> str:
    """Prefer the "from" identity, falling back to the "sender" identity."""
    identity = message.get_from_identity()
    if identity is None:
        identity = message.get_sender_identity()
    return format_identity(identity)


async def read_text_body(message: MessageHandle) -> str:
    """Read the plain-text body.

    Raises:
        BodyReadError: If the host reports failure
    """
    try:
        result = await message.read_body_as_text()
    except Exception as e:
        logger.error(f"Host raised while reading text body: {e}")
        raise BodyReadError() from e

    if not result.succeeded:
        logger.error(f"Host failed to read text body: {result.error}")
        raise BodyReadError()
    return result.value or ""


async def read_html_body(message: MessageHandle) -> str:
    """Read the HTML body, substituting "" on any failure."""
    try:
        result: HostReadResult = await message.read_body_as_html()
    except Exception as e:
        logger.warning(f"Host raised while reading HTML body, using empty body: {e}")
        return ""

    if not result.succeeded:
        logger.warning(f"HTML body unavailable, using empty body: {result.error}")
        return ""
    return result.value or ""


async def extract_snapshot(message: MessageHandle) -> EmailSnapshot:
    """Build an EmailSnapshot from the host message.

    The HTML read starts only once the text read has resolved; a text read
    failure therefore never triggers the HTML read.

    Args:
        message: Host message handle

    Returns:
        Snapshot of the message fields

    Raises:
        BodyReadError: If the plain-text body cannot be read
    """
    subject = message.get_subject() or ""
    sender = resolve_sender(message)

    body_text = await read_text_body(message)
    body_html = await read_html_body(message)

    logger.debug(
        f"Extracted message: subject={subject!r}, sender={sender!r}, "
        f"text={len(body_text)} chars, html={len(body_html)} chars"
    )
    return EmailSnapshot(
        subject=subject,
        sender=sender,
        body_text=body_text,
        body_html=body_html,
    )
