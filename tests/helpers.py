"""Mocked aiohttp sessions shared by the service tests."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

TARGET_DATE = date(2026, 1, 17)


def mock_response(status=200, payload=None, json_error=None):
    """Mock aiohttp response usable as an async context manager."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload, side_effect=json_error)
    response.__aenter__.return_value = response
    response.__aexit__.return_value = False
    return response


def mock_session(responses):
    """Mock aiohttp.ClientSession.

    ``responses`` is either a list of responses/exceptions served in order
    or a callable ``(url, params) -> response``.
    """
    session = MagicMock()
    if callable(responses):
        session.get.side_effect = lambda url, params=None, **kwargs: responses(url, params)
    else:
        session.get.side_effect = list(responses)
    return session
