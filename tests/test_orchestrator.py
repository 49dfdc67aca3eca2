"""Tests for the analysis orchestrator."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest


def _client_returning(payload: dict) -> MagicMock:
    from phishpane.schemas.analysis import AnalysisResponse

    client = MagicMock()
    client.analyze = AsyncMock(return_value=AnalysisResponse.model_validate(payload))
    return client


def _client_raising(error: Exception) -> MagicMock:
    client = MagicMock()
    client.analyze = AsyncMock(side_effect=error)
    return client


class TestAnalysisOrchestrator:
    """Tests for AnalysisOrchestrator.analyze."""

    @pytest.mark.asyncio
    async def test_success_renders_presentation(
        self, fake_message, mock_surface, high_risk_payload
    ):
        """A full run renders the presentation and never shows an error."""
        from phishpane.services.orchestrator import AnalysisOrchestrator, PipelineState

        client = _client_returning(high_risk_payload)
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)

        result = await orchestrator.analyze(fake_message, use_claude=True)

        assert result.is_ok()
        presentation = result.unwrap()
        mock_surface.render.assert_called_once_with(presentation)
        mock_surface.show_error.assert_not_called()
        assert orchestrator.state is PipelineState.IDLE
        assert orchestrator.last_outcome is PipelineState.SUCCESS

        request = client.analyze.call_args[0][0]
        assert request.mode is True
        assert request.content == (
            "From: Boss <boss@company.com>\nSubject: Quarterly report\n\nPlease review."
        )

    @pytest.mark.asyncio
    async def test_busy_transitions_wrap_the_run(
        self, fake_message, mock_surface, low_risk_payload
    ):
        """Busy state is entered before the run and always left afterwards."""
        from phishpane.services.orchestrator import AnalysisOrchestrator

        orchestrator = AnalysisOrchestrator(
            mock_surface, client=_client_returning(low_risk_payload)
        )

        await orchestrator.analyze(fake_message)

        names = [c[0] for c in mock_surface.method_calls]
        assert names == [
            "clear",
            "set_trigger_enabled",
            "set_busy",
            "render",
            "set_trigger_enabled",
            "set_busy",
        ]
        assert mock_surface.method_calls[1].args == (False,)
        assert mock_surface.method_calls[2].args == (True,)
        assert mock_surface.method_calls[4].args == (True,)
        assert mock_surface.method_calls[5].args == (False,)

    @pytest.mark.asyncio
    async def test_body_read_failure_skips_network(
        self, message_factory, mock_surface, low_risk_payload
    ):
        """A text-body failure aborts before any network call."""
        from phishpane.errors import BodyReadError
        from phishpane.host import HostReadResult
        from phishpane.services.orchestrator import AnalysisOrchestrator, PipelineState

        client = _client_returning(low_risk_payload)
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)
        message = message_factory(text_result=HostReadResult.failed("locked"))

        result = await orchestrator.analyze(message)

        assert result.is_err()
        assert isinstance(result.unwrap_err(), BodyReadError)
        client.analyze.assert_not_called()
        mock_surface.show_error.assert_called_once_with("Failed to read email body")
        mock_surface.render.assert_not_called()
        assert orchestrator.last_outcome is PipelineState.FAILED
        mock_surface.set_trigger_enabled.assert_called_with(True)
        mock_surface.set_busy.assert_called_with(False)

    @pytest.mark.asyncio
    async def test_html_read_failure_does_not_abort(
        self, message_factory, mock_surface, low_risk_payload
    ):
        from phishpane.host import HostReadResult
        from phishpane.services.orchestrator import AnalysisOrchestrator

        client = _client_returning(low_risk_payload)
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)
        message = message_factory(html_result=HostReadResult.failed("unsupported"))

        result = await orchestrator.analyze(message)

        assert result.is_ok()
        client.analyze.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_error_message_is_shown_verbatim(self, fake_message, mock_surface):
        from phishpane.errors import AnalysisRejectedError
        from phishpane.services.orchestrator import AnalysisOrchestrator

        orchestrator = AnalysisOrchestrator(
            mock_surface,
            client=_client_raising(AnalysisRejectedError("Rate limit exceeded", 429)),
        )

        result = await orchestrator.analyze(fake_message)

        assert result.unwrap_err().message == "Rate limit exceeded"
        mock_surface.show_error.assert_called_once_with("Rate limit exceeded")
        mock_surface.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_connectivity_error(self, fake_message, mock_surface):
        from phishpane.errors import ConnectivityError
        from phishpane.services.orchestrator import AnalysisOrchestrator

        orchestrator = AnalysisOrchestrator(
            mock_surface, client=_client_raising(ConnectivityError())
        )

        result = await orchestrator.analyze(fake_message)

        assert isinstance(result.unwrap_err(), ConnectivityError)
        message = mock_surface.show_error.call_args[0][0]
        assert message.startswith("Cannot connect to analysis server")

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_surfaced(self, fake_message, mock_surface):
        """Unexpected errors show their text, or the generic fallback if empty."""
        from phishpane.errors import GENERIC_FAILURE_MESSAGE
        from phishpane.services.orchestrator import AnalysisOrchestrator

        orchestrator = AnalysisOrchestrator(
            mock_surface, client=_client_raising(RuntimeError())
        )

        result = await orchestrator.analyze(fake_message)

        assert result.is_err()
        mock_surface.show_error.assert_called_once_with(GENERIC_FAILURE_MESSAGE)

    @pytest.mark.asyncio
    async def test_overlapping_trigger_is_rejected(
        self, fake_message, mock_surface, low_risk_payload
    ):
        """A second trigger during a run returns an error and leaves the run alone."""
        from phishpane.errors import AnalysisInProgressError
        from phishpane.schemas.analysis import AnalysisResponse
        from phishpane.services.orchestrator import AnalysisOrchestrator, PipelineState

        release = asyncio.Event()

        async def slow_analyze(request):
            await release.wait()
            return AnalysisResponse.model_validate(low_risk_payload)

        client = MagicMock()
        client.analyze = AsyncMock(side_effect=slow_analyze)
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)

        first = asyncio.create_task(orchestrator.analyze(fake_message))
        while client.analyze.call_count == 0:
            await asyncio.sleep(0)
        assert orchestrator.state is PipelineState.BUSY

        second = await orchestrator.analyze(fake_message)
        release.set()
        first_result = await first

        assert isinstance(second.unwrap_err(), AnalysisInProgressError)
        assert first_result.is_ok()
        assert client.analyze.await_count == 1
        mock_surface.clear.assert_called_once()
        mock_surface.render.assert_called_once()

    @pytest.mark.asyncio
    async def test_can_run_again_after_failure(
        self, fake_message, mock_surface, low_risk_payload
    ):
        from phishpane.errors import ConnectivityError
        from phishpane.schemas.analysis import AnalysisResponse
        from phishpane.services.orchestrator import AnalysisOrchestrator

        client = MagicMock()
        client.analyze = AsyncMock(
            side_effect=[
                ConnectivityError(),
                AnalysisResponse.model_validate(low_risk_payload),
            ]
        )
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)

        first = await orchestrator.analyze(fake_message)
        second = await orchestrator.analyze(fake_message)

        assert first.is_err()
        assert second.is_ok()
        assert mock_surface.clear.call_count == 2

    @pytest.mark.asyncio
    async def test_surface_failure_on_enter_does_not_stick_busy(
        self, fake_message, mock_surface, low_risk_payload
    ):
        """A surface error while entering busy fails the run and leaves the pipeline idle."""
        from phishpane.services.orchestrator import AnalysisOrchestrator, PipelineState

        client = _client_returning(low_risk_payload)
        orchestrator = AnalysisOrchestrator(mock_surface, client=client)
        mock_surface.clear.side_effect = RuntimeError("pane detached")

        first = await orchestrator.analyze(fake_message)

        assert first.is_err()
        assert orchestrator.state is PipelineState.IDLE
        client.analyze.assert_not_called()
        mock_surface.show_error.assert_called_once_with("pane detached")

        mock_surface.clear.side_effect = None
        second = await orchestrator.analyze(fake_message)

        assert second.is_ok()

    @pytest.mark.asyncio
    async def test_render_failure_returns_err(
        self, fake_message, mock_surface, low_risk_payload
    ):
        """A render error is reported through the error path, not raised."""
        from phishpane.services.orchestrator import AnalysisOrchestrator, PipelineState

        orchestrator = AnalysisOrchestrator(
            mock_surface, client=_client_returning(low_risk_payload)
        )
        mock_surface.render.side_effect = RuntimeError("render failed")

        result = await orchestrator.analyze(fake_message)

        assert result.is_err()
        assert result.unwrap_err().message == "render failed"
        assert orchestrator.last_outcome is PipelineState.FAILED
        assert orchestrator.state is PipelineState.IDLE
        mock_surface.show_error.assert_called_once_with("render failed")
        mock_surface.set_trigger_enabled.assert_called_with(True)
