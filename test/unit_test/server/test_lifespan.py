"""
Unit tests for the application lifespan.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from gto_workforce.server.main import lifespan

pytestmark = pytest.mark.asyncio


class TestLifespan:
    async def test_startup_initializes_database_and_fairwork(self):
        app = FastAPI()
        fairwork_client = MagicMock()
        fairwork_client.aclose = AsyncMock()

        with (
            patch("gto_workforce.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("gto_workforce.server.main.create_fairwork_client", return_value=fairwork_client),
        ):
            async with lifespan(app):
                mock_init_db.assert_called_once()
                assert app.state.fairwork is fairwork_client
                fairwork_client.aclose.assert_not_called()

        fairwork_client.aclose.assert_awaited_once()

    async def test_missing_fairwork_key_leaves_integration_disabled(self):
        app = FastAPI()

        with (
            patch("gto_workforce.server.main.init_db", new_callable=AsyncMock),
            patch("gto_workforce.server.main.create_fairwork_client", return_value=None),
            patch("gto_workforce.server.main.logger") as mock_logger,
        ):
            async with lifespan(app):
                assert app.state.fairwork is None

        warnings = [call[0][0] for call in mock_logger.warning.call_args_list]
        assert any("FairWork integration disabled" in message for message in warnings)

    async def test_database_failure_is_logged_and_startup_continues(self):
        app = FastAPI()

        with (
            patch("gto_workforce.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("gto_workforce.server.main.create_fairwork_client", return_value=None),
            patch("gto_workforce.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = Exception("Database connection failed")
            async with lifespan(app):
                pass

        mock_logger.error.assert_called_once()
        assert "Database initialization failed" in mock_logger.error.call_args[0][0]

    async def test_shutdown_logs_message(self):
        app = FastAPI()

        with (
            patch("gto_workforce.server.main.init_db", new_callable=AsyncMock),
            patch("gto_workforce.server.main.create_fairwork_client", return_value=None),
            patch("gto_workforce.server.main.logger") as mock_logger,
        ):
            async with lifespan(app):
                pass

        messages = [call[0][0] for call in mock_logger.info.call_args_list]
        assert any("Starting up" in message for message in messages)
        assert any("Shutting down" in message for message in messages)
