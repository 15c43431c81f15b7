"""Map completed DeepL responses to user-facing errors."""

from __future__ import annotations

import json

from .errors import DeepLError, ErrorKind


STATUS_ERRORS = {
    403: (ErrorKind.AUTHORIZATION, "Authorization failure, check your DeepL auth key"),
    456: (ErrorKind.QUOTA_EXCEEDED, "Quota for this billing period has been exceeded"),
    400: (ErrorKind.BAD_REQUEST, "Bad request, check the input text and options"),
    429: (ErrorKind.RATE_LIMITED, "Too many requests, DeepL servers are under high load"),
}


def check_response(response) -> None:
    status = response.status_code
    if 200 <= status < 400:
        return

    body = response.text or ""
    detail = _error_detail(body)
    if status in STATUS_ERRORS:
        kind, message = STATUS_ERRORS[status]
        raise DeepLError(kind, f"{message}{detail}", status_code=status)
    raise DeepLError(
        ErrorKind.UNEXPECTED_STATUS,
        f"Unexpected status code: {status}{detail}, content: {body}",
        status_code=status,
    )


def _error_detail(body: str) -> str:
    try:
        payload = json.loads(body)
    except ValueError:
        return f", {body}"
    if not isinstance(payload, dict):
        return ""
    detail = ""
    if payload.get("message") is not None:
        detail += f", message: {payload['message']}"
    if payload.get("detail") is not None:
        detail += f", detail: {payload['detail']}"
    return detail
