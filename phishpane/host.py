"""Host collaborator contract.

The mail client owns the open message; the pipeline only talks to it through
`MessageHandle`. `EmlMessageHandle` plays the host role for a saved RFC 822
message so the pipeline can run outside a mail client.
"""

import re
from dataclasses import dataclass
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from bs4 import BeautifulSoup, Comment

HIDDEN_TAGS = ["script", "style", "head", "title"]
BLOCK_TAGS = [
    "p", "div", "tr", "li", "table", "ul", "ol", "blockquote", "pre",
    "h1", "h2", "h3", "h4", "h5", "h6",
]


class AsyncResultStatus(str, Enum):
    """Outcome of an asynchronous host read."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class HostReadResult:
    """Status and value delivered by a host body read."""

    status: AsyncResultStatus
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is AsyncResultStatus.SUCCEEDED

    @classmethod
    def ok(cls, value: str) -> "HostReadResult":
        return cls(status=AsyncResultStatus.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, error: str) -> "HostReadResult":
        return cls(status=AsyncResultStatus.FAILED, error=error)


@dataclass(frozen=True)
class EmailIdentity:
    """A display name and address pair as the host reports it."""

    display_name: str
    address: str


class MessageHandle(Protocol):
    """Live reference to the currently open message."""

    def get_subject(self) -> Optional[str]: ...

    def get_from_identity(self) -> Optional[EmailIdentity]: ...

    def get_sender_identity(self) -> Optional[EmailIdentity]: ...

    async def read_body_as_text(self) -> HostReadResult: ...

    async def read_body_as_html(self) -> HostReadResult: ...


def html_to_text(html_body: str) -> str:
    """Coerce an HTML body to text for messages without a text/plain part.

    Scripts, styles and comments are dropped; line breaks and block elements
    end a line. Entities are decoded by the parser.
    """
    soup = BeautifulSoup(html_body, "html.parser")

    for element in soup.find_all(HIDDEN_TAGS):
        element.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")

    text = soup.get_text()
    lines = [line.strip() for line in text.splitlines()]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


class EmlMessageHandle:
    """Host implementation backed by a parsed .eml message."""

    def __init__(self, message: EmailMessage):
        self.message = message

    @classmethod
    def from_bytes(cls, raw: bytes) -> "EmlMessageHandle":
        return cls(BytesParser(policy=policy.default).parsebytes(raw))

    @classmethod
    def from_path(cls, path: str | Path) -> "EmlMessageHandle":
        return cls.from_bytes(Path(path).read_bytes())

    def get_subject(self) -> Optional[str]:
        subject = self.message.get("Subject")
        return str(subject) if subject is not None else None

    def get_from_identity(self) -> Optional[EmailIdentity]:
        return self._identity("From")

    def get_sender_identity(self) -> Optional[EmailIdentity]:
        return self._identity("Sender")

    async def read_body_as_text(self) -> HostReadResult:
        plain = self._part_content("plain")
        if plain is not None:
            return HostReadResult.ok(plain)
        html_body = self._part_content("html")
        if html_body is not None:
            return HostReadResult.ok(html_to_text(html_body))
        return HostReadResult.failed("Message has no text body")

    async def read_body_as_html(self) -> HostReadResult:
        html_body = self._part_content("html")
        if html_body is None:
            return HostReadResult.failed("Message has no HTML body")
        return HostReadResult.ok(html_body)

    def _identity(self, header: str) -> Optional[EmailIdentity]:
        value = self.message.get(header)
        if value is None:
            return None
        addresses = getattr(value, "addresses", ())
        if not addresses:
            return None
        address = addresses[0]
        return EmailIdentity(display_name=address.display_name, address=address.addr_spec)

    def _part_content(self, subtype: str) -> Optional[str]:
        part = self.message.get_body(preferencelist=(subtype,))
        if part is None:
            return None
        content = part.get_content()
        if isinstance(content, bytes):
            charset = part.get_content_charset() or "utf-8"
            return content.decode(charset, errors="replace")
        return content
