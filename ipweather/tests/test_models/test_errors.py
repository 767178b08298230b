"""Tests for the classified error hierarchy."""

import pytest

from ipweather.errors import (
    EmptyResultError,
    ErrorKind,
    HttpStatusError,
    InvalidInputError,
    MalformedResponseError,
    NetworkFailureError,
    PipelineFailure,
    ResolutionError,
)
from ipweather.models.pipeline import Stage


@pytest.mark.parametrize(
    ("cls", "kind"),
    [
        (InvalidInputError, ErrorKind.INVALID_INPUT),
        (NetworkFailureError, ErrorKind.NETWORK_FAILURE),
        (MalformedResponseError, ErrorKind.MALFORMED_RESPONSE),
        (EmptyResultError, ErrorKind.EMPTY_RESULT),
    ],
)
def test_each_class_has_its_kind(cls, kind):
    err = cls("boom")
    assert isinstance(err, ResolutionError)
    assert err.kind == kind
    assert str(err) == "boom"


def test_http_status_error():
    err = HttpStatusError(418, "https://example.com/tea")
    assert err.kind == ErrorKind.HTTP_STATUS_FAILURE
    assert err.status_code == 418
    assert "418" in str(err) and "https://example.com/tea" in str(err)


def test_pipeline_failure_forwards_kind():
    cause = HttpStatusError(503)
    failure = PipelineFailure(Stage.GEOLOCATION, cause)
    assert failure.stage == Stage.GEOLOCATION
    assert failure.error is cause
    assert failure.kind == ErrorKind.HTTP_STATUS_FAILURE
    assert "geolocation stage failed (HttpStatusFailure)" in str(failure)
