"""Error taxonomy shared by the request layer and the entry points."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_INPUT = "invalid_input"
    TRANSPORT = "transport"
    RATE_LIMITED = "rate_limited"
    SERVER_OVERLOAD = "server_overload"
    AUTHORIZATION = "authorization"
    QUOTA_EXCEEDED = "quota_exceeded"
    BAD_REQUEST = "bad_request"
    UNEXPECTED_STATUS = "unexpected_status"
    BAD_RESPONSE = "bad_response"
    MAX_RETRIES = "max_retries"


class DeepLError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
        last_failure: Optional[ErrorKind] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.last_failure = last_failure


def invalid_input(message: str) -> DeepLError:
    return DeepLError(ErrorKind.INVALID_INPUT, message)
