"""
Unit tests for the request logging middleware.

This test suite covers:
- Request metrics reporting
- X-Process-Time header injection
- Slow request detection
- Error propagation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from gto_workforce.server.middleware import RequestLoggingMiddleware


def _request(method: str = "GET", path: str = "/api/v1/apprentices"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


class TestRequestLoggingMiddleware:
    """Test RequestLoggingMiddleware.dispatch."""

    @pytest.mark.asyncio
    async def test_reports_request_metrics(self):
        async def call_next(request):
            return Response(content="ok", status_code=201)

        middleware = RequestLoggingMiddleware(app=AsyncMock())

        with patch("gto_workforce.server.middleware.request_logging.log_api_request") as mock_log:
            response = await middleware.dispatch(_request("POST"), call_next)

        assert response.status_code == 201
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "POST"
        assert kwargs["path"] == "/api/v1/apprentices"
        assert kwargs["status_code"] == 201
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self):
        async def call_next(request):
            return Response(content="ok")

        middleware = RequestLoggingMiddleware(app=AsyncMock())
        with patch("gto_workforce.server.middleware.request_logging.log_api_request"):
            response = await middleware.dispatch(_request(), call_next)

        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_warns_on_slow_request(self):
        async def call_next(request):
            return Response(content="ok")

        middleware = RequestLoggingMiddleware(app=AsyncMock())
        with (
            patch("gto_workforce.server.middleware.request_logging.time.time", side_effect=[0.0, 2.0]),
            patch("gto_workforce.server.middleware.request_logging.log_api_request"),
            patch("gto_workforce.server.middleware.request_logging.logger") as mock_logger,
        ):
            response = await middleware.dispatch(_request(), call_next)

        assert response.headers["X-Process-Time"] == "2000.00"
        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_reraises_and_records_500(self):
        async def call_next(request):
            raise RuntimeError("handler failed")

        middleware = RequestLoggingMiddleware(app=AsyncMock())
        with (
            patch("gto_workforce.server.middleware.request_logging.log_api_request") as mock_log,
            patch("gto_workforce.server.middleware.request_logging.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError):
                await middleware.dispatch(_request(), call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()
