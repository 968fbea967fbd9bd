"""
Tests for API decorators
"""
import pytest
import threading
from quart import Quart

from core.errors import DownloadError, KeyNotFoundError
from utils.decorators import api_handler, sync_to_async


@pytest.fixture
def app():
    """Create a test Quart app."""
    app = Quart(__name__)
    app.config['TESTING'] = True
    return app


class TestApiHandlerDecorator:
    """Test @api_handler decorator."""

    @pytest.mark.asyncio
    async def test_successful_response_wrapping(self, app):
        """Test that dict responses are auto-wrapped with success=True."""
        @api_handler()
        async def test_endpoint():
            return {"data": "value", "count": 10}

        async with app.app_context():
            result = await test_endpoint()
            data = await result.get_json()

            assert data["success"] is True
            assert data["data"] == "value"
            assert data["count"] == 10

    @pytest.mark.asyncio
    async def test_successful_response_with_existing_success(self, app):
        """Test that existing success key is preserved."""
        @api_handler()
        async def test_endpoint():
            return {"success": False, "data": "value"}

        async with app.app_context():
            result = await test_endpoint()
            data = await result.get_json()

            assert data["success"] is False

    @pytest.mark.asyncio
    async def test_value_error_returns_400(self, app):
        @api_handler()
        async def test_endpoint():
            raise ValueError("Invalid input")

        async with app.app_context():
            result = await test_endpoint()
            data = await result[0].get_json()

            assert result[1] == 400
            assert data["success"] is False
            assert data["error"] == "Invalid input"

    @pytest.mark.asyncio
    async def test_missing_key_returns_404(self, app):
        @api_handler()
        async def test_endpoint():
            raise KeyNotFoundError('emote_uploaded_file_id:1')

        async with app.app_context():
            result = await test_endpoint()
            data = await result[0].get_json()

            assert result[1] == 404
            assert 'emote_uploaded_file_id:1' in data["error"]

    @pytest.mark.asyncio
    async def test_remote_failure_returns_502(self, app):
        @api_handler(log_errors=False)
        async def test_endpoint():
            raise DownloadError('https://cdn.example.com/1.png', 404, 'Not Found')

        async with app.app_context():
            result = await test_endpoint()
            data = await result[0].get_json()

            assert result[1] == 502
            assert '404 Not Found' in data["error"]

    @pytest.mark.asyncio
    async def test_generic_exception_returns_500(self, app):
        @api_handler(log_errors=False)
        async def test_endpoint():
            raise RuntimeError("Something broke")

        async with app.app_context():
            result = await test_endpoint()
            data = await result[0].get_json()

            assert result[1] == 500
            assert data["error"] == "Something broke"

    @pytest.mark.asyncio
    async def test_non_dict_passthrough(self, app):
        @api_handler()
        async def test_endpoint():
            return "plain", 201

        async with app.app_context():
            assert await test_endpoint() == ("plain", 201)


class TestSyncToAsync:
    @pytest.mark.asyncio
    async def test_runs_in_worker_thread(self):
        main_thread = threading.get_ident()

        @sync_to_async
        def work(x, y=1):
            return x + y, threading.get_ident()

        result, thread_id = await work(2, y=3)
        assert result == 5
        assert thread_id != main_thread
