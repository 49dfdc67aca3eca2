"""Error taxonomy for the analysis pipeline.

Every error carries the message shown to the user verbatim.
"""

from typing import Optional

GENERIC_FAILURE_MESSAGE = "Failed to analyze email. Please try again."


class AnalysisError(Exception):
    """Base class for failures that end an analysis run."""

    default_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BodyReadError(AnalysisError):
    """Exception raised when the host cannot return the plain-text body."""

    default_message = "Failed to read email body"


class ConnectivityError(AnalysisError):
    """Exception raised when the analysis server cannot be reached."""

    default_message = (
        "Cannot connect to analysis server. Make sure the analysis server is running."
    )


class AnalysisRejectedError(AnalysisError):
    """Exception raised when the analysis server answers with a failure status."""

    default_message = "Analysis failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(AnalysisError):
    """Exception raised when a success response cannot be interpreted."""

    default_message = "Analysis server returned an invalid response"


class AnalysisInProgressError(AnalysisError):
    """Returned when a run is triggered while another one is still busy."""

    default_message = "An analysis is already in progress"
