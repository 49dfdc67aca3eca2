"""Analysis API client.

Submits composed requests to the remote phishing-analysis service and maps
transport and HTTP failures to typed errors.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from phishpane.config import AnalysisEndpoint, get_settings
from phishpane.errors import (
    AnalysisRejectedError,
    ConnectivityError,
    InvalidResponseError,
)
from phishpane.schemas.analysis import AnalysisResponse, ErrorBody
from phishpane.schemas.email import AnalysisRequest
from phishpane.utils.logging import get_logger

logger = get_logger(__name__)


def extract_error_message(response: httpx.Response) -> Optional[str]:
    """Get the server-supplied error message from a failure response.

    Args:
        response: Non-success HTTP response

    Returns:
        The `error` field when the body is a JSON object carrying one,
        otherwise None
    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        body = ErrorBody.model_validate(payload)
    except ValidationError:
        return None
    return body.error or None


def parse_analysis_response(payload: Any) -> AnalysisResponse:
    """Validate a decoded success body.

    Raises:
        InvalidResponseError: If the body is not an object, fails validation,
            or carries no confidence score
    """
    if not isinstance(payload, dict):
        raise InvalidResponseError()
    try:
        result = AnalysisResponse.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Analysis response failed validation: {e}")
        raise InvalidResponseError() from e
    if result.confidence_score is None:
        logger.error("Analysis response has no confidence_score")
        raise InvalidResponseError()
    return result


class AnalysisClient:
    """Client for the analysis service's HTTP API."""

    def __init__(self, endpoint: AnalysisEndpoint | None = None):
        """Initialize client with a fixed endpoint.

        Args:
            endpoint: Endpoint configuration; defaults to the one in settings
        """
        self.endpoint = endpoint or get_settings().analysis_endpoint()

    async def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        """Submit a request to POST /analyze.

        Exactly one outbound call is made; there are no retries.

        Args:
            request: Composed analysis request

        Returns:
            Parsed analysis response

        Raises:
            ConnectivityError: If the server cannot be reached
            AnalysisRejectedError: If the server answers with a failure status
            InvalidResponseError: If a success body cannot be interpreted
        """
        url = self.endpoint.analyze_url
        # (None, value) parts are plain form fields, which forces multipart encoding
        files = {
            name: (None, value.encode("utf-8"))
            for name, value in request.form_fields().items()
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url, files=files, timeout=self.endpoint.timeout_seconds
                )
        except httpx.TransportError as e:
            logger.error(f"Analysis server unreachable at {url}: {e!r}")
            raise ConnectivityError() from e

        if not 200 <= response.status_code < 300:
            message = extract_error_message(response)
            logger.error(
                f"Analysis API error: {response.status_code} - {message or response.text}"
            )
            raise AnalysisRejectedError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Analysis response is not JSON: {response.text[:200]}")
            raise InvalidResponseError() from e

        result = parse_analysis_response(payload)
        logger.info(f"Analysis completed: confidence_score={result.confidence_score}")
        return result
