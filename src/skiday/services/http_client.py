"""Async JSON GET with retry, mapping provider failures onto the error taxonomy."""

import asyncio
import logging
from typing import Any

import aiohttp

from skiday.services.errors import ProviderError, RateLimitedError

logger = logging.getLogger(__name__)


# Retry configuration for API calls
RETRY_DELAYS = [1, 2, 4]  # Exponential backoff: 1s, 2s, 4s
RETRYABLE_STATUS_CODES = {500, 502, 503, 504}
RATE_LIMIT_STATUS = 429


class _RetryableError(Exception):
    """Transient failure worth another attempt."""


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    params: dict[str, Any] | None = None,
    *,
    provider: str,
    headers: dict[str, str] | None = None,
    timeout: float = 10.0,
    max_retries: int = 3,
    retry_delays: list[float] | None = None,
) -> Any:
    """GET a URL and decode its JSON body.

    Args:
        session: Shared aiohttp session
        url: Request URL
        params: Query parameters
        provider: Provider name used in errors and logs
        headers: Extra request headers
        timeout: Total timeout per attempt in seconds
        max_retries: Attempts before giving up on transient failures
        retry_delays: Backoff schedule, defaults to RETRY_DELAYS

    Returns:
        Decoded JSON payload

    Raises:
        RateLimitedError: Provider answered 429 (never retried)
        ProviderError: Any other non-2xx answer, exhausted retries or bad JSON
    """
    delays = RETRY_DELAYS if retry_delays is None else retry_delays
    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            return await _get_once(session, url, params, provider, headers, timeout)
        except _RetryableError as e:
            last_error = e
            if attempt == max_retries - 1:
                break

            delay = delays[min(attempt, len(delays) - 1)] if delays else 0
            logger.warning(
                f"Request to {provider} failed (attempt {attempt + 1}/{max_retries}): {e}. "
                f"Retrying in {delay}s..."
            )
            await asyncio.sleep(delay)

    raise ProviderError(provider, f"request failed after {max_retries} attempts: {last_error}")


async def _get_once(
    session: aiohttp.ClientSession,
    url: str,
    params: dict[str, Any] | None,
    provider: str,
    headers: dict[str, str] | None,
    timeout: float,
) -> Any:
    try:
        async with session.get(
            url,
            params=params,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if resp.status == RATE_LIMIT_STATUS:
                logger.warning(f"{provider} rate limit hit (HTTP 429)")
                raise RateLimitedError(provider)
            if resp.status in RETRYABLE_STATUS_CODES:
                raise _RetryableError(f"HTTP {resp.status}")
            if resp.status < 200 or resp.status >= 300:
                raise ProviderError(
                    provider, f"HTTP {resp.status}", status_code=resp.status
                )
            try:
                return await resp.json(content_type=None)
            except ValueError as e:
                raise ProviderError(
                    provider, f"invalid JSON response: {e}", status_code=resp.status
                )
    except (asyncio.TimeoutError, aiohttp.ClientConnectionError) as e:
        raise _RetryableError(f"{type(e).__name__}: {e}")
    except aiohttp.ClientError as e:
        raise ProviderError(provider, f"transport error: {e}")
