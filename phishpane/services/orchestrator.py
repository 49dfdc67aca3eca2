"""Analysis Orchestration Service.

Handles one analysis run end to end:
1. Extract fields from the open message
2. Compose the analysis request
3. Submit it to the analysis server
4. Build the risk presentation and hand it to the presentation surface

Only this module touches the presentation surface.
"""

from enum import Enum
from typing import Protocol

from result import Err, Ok, Result

from phishpane.errors import (
    GENERIC_FAILURE_MESSAGE,
    AnalysisError,
    AnalysisInProgressError,
)
from phishpane.host import MessageHandle
from phishpane.schemas.presentation import RiskPresentation
from phishpane.services.analysis_client import AnalysisClient
from phishpane.services.composer import compose_request
from phishpane.services.extractor import extract_snapshot
from phishpane.services.presenter import build_presentation
from phishpane.utils.logging import get_logger

logger = get_logger(__name__)


class PipelineState(Enum):
    """States of an analysis run."""

    IDLE = "idle"
    BUSY = "busy"
    SUCCESS = "success"
    FAILED = "failed"


class PresentationSurface(Protocol):
    """Screen-side collaborator driven by the orchestrator."""

    def clear(self) -> None: ...

    def set_trigger_enabled(self, enabled: bool) -> None: ...

    def set_busy(self, busy: bool) -> None: ...

    def render(self, presentation: RiskPresentation) -> None: ...

    def show_error(self, message: str) -> None: ...


class AnalysisOrchestrator:
    """Runs Extractor -> Composer -> Client -> Presenter for one trigger."""

    def __init__(
        self,
        surface: PresentationSurface,
        client: AnalysisClient | None = None,
    ) -> None:
        self.surface = surface
        self.client = client or AnalysisClient()
        self._state = PipelineState.IDLE
        self.last_outcome: PipelineState | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    async def analyze(
        self, message: MessageHandle, use_claude: bool = False
    ) -> Result[RiskPresentation, AnalysisError]:
        """Analyze the open message and update the surface.

        A trigger while a run is in flight is rejected without touching the
        surface. Either a full presentation or an error message is shown,
        never both.

        Args:
            message: Host message handle
            use_claude: Select the alternate analysis backend

        Returns:
            Result containing the rendered RiskPresentation or the error
        """
        if self._state is PipelineState.BUSY:
            logger.warning("Analysis trigger ignored: a run is already in progress")
            return Err(AnalysisInProgressError())

        try:
            self._enter_busy()
            presentation = await self._run_pipeline(message, use_claude)
            self.surface.render(presentation)
        except AnalysisError as e:
            logger.error(f"Analysis failed: {type(e).__name__}: {e.message}")
            return Err(self._fail(e))
        except Exception as e:
            logger.exception(f"Unexpected error during analysis: {e}")
            return Err(self._fail(AnalysisError(str(e) or None)))
        else:
            self._state = PipelineState.SUCCESS
            self.last_outcome = PipelineState.SUCCESS
            logger.info(
                f"Analysis rendered: score={presentation.score_percent}, "
                f"band={presentation.band.value}"
            )
            return Ok(presentation)
        finally:
            self._leave_busy()

    async def _run_pipeline(
        self, message: MessageHandle, use_claude: bool
    ) -> RiskPresentation:
        snapshot = await extract_snapshot(message)
        request = compose_request(snapshot, use_claude)
        response = await self.client.analyze(request)
        return build_presentation(response)

    def _enter_busy(self) -> None:
        self._state = PipelineState.BUSY
        self.surface.clear()
        self.surface.set_trigger_enabled(False)
        self.surface.set_busy(True)

    def _fail(self, error: AnalysisError) -> AnalysisError:
        self._state = PipelineState.FAILED
        self.last_outcome = PipelineState.FAILED
        self.surface.show_error(error.message or GENERIC_FAILURE_MESSAGE)
        return error

    def _leave_busy(self) -> None:
        self._state = PipelineState.IDLE
        self.surface.set_trigger_enabled(True)
        self.surface.set_busy(False)
