"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After et reste une ProviderError
- with_retry relance uniquement sur RateLimitError
- request_with_retry detecte les 429 et relance automatiquement
- Les autres statuts d'erreur remontent sans retry
"""

import httpx
import pytest
import respx

from cinescan.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from cinescan.core.errors import ProviderError

URL = "https://api.example.com/data"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_rate_limit_error_without_retry_after(self) -> None:
        error = RateLimitError(retry_after=None)
        assert error.retry_after is None

    def test_rate_limit_error_is_a_provider_error(self) -> None:
        """Une fois les tentatives epuisees, le 429 est traite comme une ProviderError."""
        assert isinstance(RateLimitError(), ProviderError)


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_rate_limit_error(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=1)
            return "success"

        assert await flaky_function() == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_stops_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=1)

        with pytest.raises(RateLimitError):
            await always_fails()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_with_retry_does_not_retry_other_provider_errors(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def raises_provider_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ProviderError("HTTP 500")

        with pytest.raises(ProviderError):
            await raises_provider_error()
        assert call_count == 1  # Pas de retry


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_429(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"status": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3, max_wait=1)

        assert response.json() == {"status": "ok"}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_passes_on_success(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(return_value=httpx.Response(200, json={"data": "value"}))

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL)

        assert response.status_code == 200
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_other_errors(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1  # Pas de retry sur 500

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_date_retry_after_is_ignored(self, respx_mock: respx.Router) -> None:
        respx_mock.get(URL).mock(
            return_value=httpx.Response(
                429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=1)

        assert exc_info.value.retry_after is None
