"""Schemas for the analysis server's responses.

The server is untrusted: every field may be missing or null, and unknown
fields are ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkInfo(BaseModel):
    """A link the server found in the message."""

    model_config = ConfigDict(extra="ignore")

    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class EmailDetails(BaseModel):
    """Subject and sender as the server parsed them back out of the content."""

    model_config = ConfigDict(extra="ignore")

    subject: str = ""
    sender: str = ""

    @field_validator("subject", "sender", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class AnalysisResponse(BaseModel):
    """Successful response body of POST /analyze."""

    model_config = ConfigDict(extra="ignore")

    confidence_score: int | None = None
    analysis: str = ""
    sender_analysis: list[str] = Field(default_factory=list)
    suspicious_keywords: list[str] = Field(default_factory=list)
    link_analysis: list[str] = Field(default_factory=list)
    links: list[LinkInfo] = Field(default_factory=list)
    email_details: EmailDetails = Field(default_factory=EmailDetails)

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis_none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator(
        "sender_analysis", "suspicious_keywords", "link_analysis", "links",
        mode="before",
    )
    @classmethod
    def _list_none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("email_details", mode="before")
    @classmethod
    def _details_none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def subject_echo(self) -> str:
        return self.email_details.subject

    @property
    def sender_echo(self) -> str:
        return self.email_details.sender


class ErrorBody(BaseModel):
    """Failure response body of POST /analyze."""

    model_config = ConfigDict(extra="ignore")

    error: str | None = None
