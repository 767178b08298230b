"""Tests for the single-shot fetcher with mocked httpx."""

import httpx
import pytest
import respx

from ipweather.errors import (
    ErrorKind,
    HttpStatusError,
    InvalidInputError,
    MalformedResponseError,
    NetworkFailureError,
)
from ipweather.ingest.http_fetcher import HttpJsonFetcher

URL = "https://test-api.example.com/data"


class TestFetchJson:
    @respx.mock
    def test_success(self, fetcher: HttpJsonFetcher):
        route = respx.get(URL).mock(
            return_value=httpx.Response(200, json={"properties": {"a": 1}})
        )
        assert fetcher.fetch_json(URL) == {"properties": {"a": 1}}
        assert route.call_count == 1

    @respx.mock
    def test_user_agent_header(self, fetcher: HttpJsonFetcher):
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        fetcher.fetch_json(URL)
        request = route.calls[0].request
        assert request.headers["user-agent"] == "ipweather-tests/0.1.0"
        assert "json" in request.headers["accept"]

    @pytest.mark.parametrize("status", [201, 204, 301, 404, 429, 500, 503])
    @respx.mock
    def test_non_200_carries_status(self, fetcher: HttpJsonFetcher, status: int):
        route = respx.get(URL).mock(return_value=httpx.Response(status))
        with pytest.raises(HttpStatusError) as exc_info:
            fetcher.fetch_json(URL)
        assert exc_info.value.status_code == status
        assert exc_info.value.kind == ErrorKind.HTTP_STATUS_FAILURE
        assert exc_info.value.url == URL
        # No retry on any status
        assert route.call_count == 1

    def test_redirect_not_followed(self, fetcher: HttpJsonFetcher):
        with respx.mock(assert_all_called=False) as router:
            router.get(URL).mock(
                return_value=httpx.Response(301, headers={"Location": URL + "/moved"})
            )
            moved = router.get(URL + "/moved").mock(return_value=httpx.Response(200, json={}))
            with pytest.raises(HttpStatusError) as exc_info:
                fetcher.fetch_json(URL)
            assert not moved.called
        assert exc_info.value.status_code == 301

    @respx.mock
    def test_invalid_json(self, fetcher: HttpJsonFetcher):
        respx.get(URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(MalformedResponseError):
            fetcher.fetch_json(URL)

    @respx.mock
    def test_empty_body(self, fetcher: HttpJsonFetcher):
        respx.get(URL).mock(return_value=httpx.Response(200, content=b""))
        with pytest.raises(MalformedResponseError):
            fetcher.fetch_json(URL)

    @respx.mock
    def test_connect_error(self, fetcher: HttpJsonFetcher):
        route = respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(NetworkFailureError) as exc_info:
            fetcher.fetch_json(URL)
        assert "refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert route.call_count == 1

    @respx.mock
    def test_timeout(self, fetcher: HttpJsonFetcher):
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(NetworkFailureError, match="timed out"):
            fetcher.fetch_json(URL)

    @respx.mock
    def test_timeout_passed_to_transport(self):
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        HttpJsonFetcher(timeout=2.5).fetch_json(URL)
        timeout = route.calls[0].request.extensions["timeout"]
        assert timeout["read"] == 2.5


class TestInvalidUrl:
    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "/relative/path", "ftp://example.com/x", "https://", "mailto:a@b.c"],
    )
    @respx.mock
    def test_rejected_without_request(self, fetcher: HttpJsonFetcher, url: str):
        with pytest.raises(InvalidInputError):
            fetcher.fetch_json(url)
        assert len(respx.calls) == 0


class TestFetchText:
    @respx.mock
    def test_returns_body(self, fetcher: HttpJsonFetcher):
        respx.get(URL).mock(return_value=httpx.Response(200, text="8.8.8.8\n"))
        assert fetcher.fetch_text(URL) == "8.8.8.8\n"

    @respx.mock
    def test_status_failure(self, fetcher: HttpJsonFetcher):
        respx.get(URL).mock(return_value=httpx.Response(502, text="bad gateway"))
        with pytest.raises(HttpStatusError) as exc_info:
            fetcher.fetch_text(URL)
        assert exc_info.value.status_code == 502
