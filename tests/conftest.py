"""Shared test doubles for the host message and presentation surface."""

from unittest.mock import MagicMock

import pytest

from phishpane.host import EmailIdentity, HostReadResult


class FakeMessage:
    """In-memory host message that records the order of body reads."""

    def __init__(
        self,
        subject: str | None = "Quarterly report",
        from_identity: EmailIdentity | None = EmailIdentity("Boss", "boss@company.com"),
        sender_identity: EmailIdentity | None = None,
        text_result: HostReadResult | Exception = HostReadResult.ok("Please review."),
        html_result: HostReadResult | Exception = HostReadResult.ok("<p>Please review.</p>"),
    ):
        self.subject = subject
        self.from_identity = from_identity
        self.sender_identity = sender_identity
        self.text_result = text_result
        self.html_result = html_result
        self.calls: list[str] = []

    def get_subject(self):
        return self.subject

    def get_from_identity(self):
        return self.from_identity

    def get_sender_identity(self):
        return self.sender_identity

    async def read_body_as_text(self):
        self.calls.append("text")
        if isinstance(self.text_result, Exception):
            raise self.text_result
        return self.text_result

    async def read_body_as_html(self):
        self.calls.append("html")
        if isinstance(self.html_result, Exception):
            raise self.html_result
        return self.html_result


@pytest.fixture
def fake_message() -> FakeMessage:
    return FakeMessage()


@pytest.fixture
def mock_surface() -> MagicMock:
    """Presentation surface double with a shared call log."""
    return MagicMock()


@pytest.fixture
def high_risk_payload() -> dict:
    return {
        "confidence_score": 75,
        "analysis": "Sender domain does not match.\n\nLinks redirect.\n\nExtra detail.",
        "sender_analysis": ["Domain mismatch detected"],
        "suspicious_keywords": ["urgent", "verify", "suspend", "now"],
        "link_analysis": [
            "Shortened URL found",
            "Redirect chain detected",
            "Unrelated domain",
        ],
        "links": [{"url": "http://x.test"}, {"url": "http://y.test"}],
        "email_details": {"subject": "Account notice", "sender": "IT <it@x.test>"},
    }


@pytest.fixture
def low_risk_payload() -> dict:
    return {
        "confidence_score": 15,
        "analysis": "Looks fine.\n\nNo action needed.\n\nExtra.",
        "sender_analysis": ["No obvious spoofing"],
        "suspicious_keywords": [],
        "link_analysis": [],
        "links": [],
        "email_details": {"subject": "Lunch", "sender": "Amy <amy@corp.test>"},
    }


@pytest.fixture
def message_factory() -> type[FakeMessage]:
    """Build FakeMessage instances with custom host behaviour."""
    return FakeMessage
