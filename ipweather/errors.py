"""Classified resolution errors shared by every pipeline stage."""

from enum import StrEnum

from ipweather.models.pipeline import Stage


class ErrorKind(StrEnum):
    INVALID_INPUT = "InvalidInput"
    NETWORK_FAILURE = "NetworkFailure"
    HTTP_STATUS_FAILURE = "HttpStatusFailure"
    MALFORMED_RESPONSE = "MalformedResponse"
    EMPTY_RESULT = "EmptyResult"


class ResolutionError(Exception):
    """Base error for a stage that could not produce its value.

    Callers branch on ``kind``; the message is for humans only.
    """

    kind: ErrorKind


class InvalidInputError(ResolutionError):
    """Raised before any network I/O when an argument is malformed."""

    kind = ErrorKind.INVALID_INPUT


class NetworkFailureError(ResolutionError):
    """Raised on DNS, connection, timeout or other transport faults."""

    kind = ErrorKind.NETWORK_FAILURE


class HttpStatusError(ResolutionError):
    """Raised when an upstream answers with anything other than 200."""

    kind = ErrorKind.HTTP_STATUS_FAILURE

    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP {status_code} from {url}" if url else f"HTTP {status_code}")
        self.status_code = status_code
        self.url = url


class MalformedResponseError(ResolutionError):
    """Raised when a body cannot be parsed or lacks an expected field."""

    kind = ErrorKind.MALFORMED_RESPONSE


class EmptyResultError(ResolutionError):
    """Raised when a well-formed response carries no usable data."""

    kind = ErrorKind.EMPTY_RESULT


class PipelineFailure(Exception):
    """A stage error forwarded by the pipeline with the stage that raised it."""

    def __init__(self, stage: Stage, error: ResolutionError):
        super().__init__(f"{stage.value} stage failed ({error.kind.value}): {error}")
        self.stage = stage
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind
