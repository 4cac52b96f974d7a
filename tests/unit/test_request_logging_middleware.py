"""Unit tests for request logging middleware."""

import pytest
import structlog
from types import SimpleNamespace
from unittest.mock import Mock, patch
from fastapi import Request, Response

from cashsaver.middleware.request_logging import RequestLoggingMiddleware


@pytest.mark.unit
class TestRequestLoggingMiddleware:
    """Test request logging middleware."""

    @pytest.fixture
    def middleware(self):
        """Create middleware instance."""
        app = Mock()
        return RequestLoggingMiddleware(app)

    def _request(self, path="/api/v1/goals/", method="GET"):
        request = Mock(spec=Request)
        request.method = method
        request.url = Mock()
        request.url.path = path
        request.state = SimpleNamespace()
        return request

    def _call_next(self, status_code):
        async def call_next(request):
            response = Mock(spec=Response)
            response.status_code = status_code
            response.headers = {}
            return response

        return call_next

    @pytest.mark.asyncio
    async def test_sets_request_id_header(self, middleware):
        """Should echo the generated request id in the response."""
        request = self._request()

        response = await middleware.dispatch(request, self._call_next(200))

        assert response.headers["X-Request-ID"] == request.state.request_id

    @pytest.mark.asyncio
    async def test_request_id_bound_for_downstream_logs(self, middleware):
        """Should expose the request id to structlog only while the request runs."""
        request = self._request()
        seen = {}

        async def call_next(req):
            seen.update(structlog.contextvars.get_contextvars())
            response = Mock(spec=Response)
            response.status_code = 200
            response.headers = {}
            return response

        await middleware.dispatch(request, call_next)

        assert seen["request_id"] == request.state.request_id
        assert structlog.contextvars.get_contextvars() == {}

    @pytest.mark.asyncio
    async def test_skips_health_checks(self, middleware):
        """Should not log or tag health checks."""
        with patch("cashsaver.middleware.request_logging.logger") as mock_logger:
            response = await middleware.dispatch(self._request("/health"), self._call_next(200))

        assert "X-Request-ID" not in response.headers
        assert not mock_logger.info.called

    @pytest.mark.asyncio
    async def test_logs_success_as_info(self, middleware):
        with patch("cashsaver.middleware.request_logging.logger") as mock_logger:
            await middleware.dispatch(self._request(), self._call_next(200))

        assert mock_logger.info.called
        assert "/api/v1/goals/" in mock_logger.info.call_args.args[0]

    @pytest.mark.asyncio
    async def test_logs_client_errors_as_warning(self, middleware):
        with patch("cashsaver.middleware.request_logging.logger") as mock_logger:
            await middleware.dispatch(self._request(), self._call_next(404))

        assert mock_logger.warning.called
        assert not mock_logger.error.called

    @pytest.mark.asyncio
    async def test_logs_server_errors_as_error(self, middleware):
        with patch("cashsaver.middleware.request_logging.logger") as mock_logger:
            await middleware.dispatch(self._request(method="POST"), self._call_next(503))

        assert mock_logger.error.called
