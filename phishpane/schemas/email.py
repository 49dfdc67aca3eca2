"""Email snapshot and the request composed from it."""

from pydantic import BaseModel, ConfigDict


class EmailSnapshot(BaseModel):
    """Fields read from the open message for a single analysis run."""

    model_config = ConfigDict(frozen=True)

    subject: str = ""
    sender: str = ""
    body_text: str = ""
    body_html: str = ""


class AnalysisRequest(BaseModel):
    """Payload submitted to POST /analyze."""

    model_config = ConfigDict(frozen=True)

    mode: bool
    content: str

    def form_fields(self) -> dict[str, str]:
        """Multipart form fields as the analysis server expects them.

        The mode flag is sent the way a browser form serializes a boolean
        ("true"/"false").
        """
        return {
            "use_claude": "true" if self.mode else "false",
            "pasted_content": self.content,
        }
