"""DeepL request execution with retries on rate limits, overload and timeouts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import time
from typing import Mapping, Optional

import requests

from . import backoff
from .errors import DeepLError, ErrorKind


FREE_API_URL = "https://api-free.deepl.com"
PRO_API_URL = "https://api.deepl.com"
FREE_KEY_SUFFIX = ":fx"
AUTH_SCHEME = "DeepL-Auth-Key"
MAX_ATTEMPTS = 5


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Outcome:
    """Classification of one attempt.

    SUCCESS means the exchange completed and the response goes back to the
    caller, whatever its status. RETRYABLE carries the failure kind in
    ``reason``. TERMINAL carries the transport error to re-raise.
    """

    kind: OutcomeKind
    response: Optional[requests.Response] = None
    reason: Optional[ErrorKind] = None
    error: Optional[BaseException] = None


def is_free_key(auth_key: str) -> bool:
    return auth_key.endswith(FREE_KEY_SUFFIX)


def base_url_for_key(auth_key: str, free_url: str = FREE_API_URL, pro_url: str = PRO_API_URL) -> str:
    base = free_url if is_free_key(auth_key) else pro_url
    return base.rstrip("/")


def redact_key(auth_key: str) -> str:
    if len(auth_key) <= 8:
        return "***"
    return f"{auth_key[:4]}...{auth_key[-3:]}"


def send_request(
    session: requests.Session,
    auth_key: str,
    method: str,
    path: str,
    *,
    logger,
    timeout: float,
    data: Optional[Mapping[str, str]] = None,
    size_hint: int = 0,
    free_url: str = FREE_API_URL,
    pro_url: str = PRO_API_URL,
) -> requests.Response:
    url = base_url_for_key(auth_key, free_url, pro_url) + path
    logger.info(
        "deepl_request",
        extra={
            "event": "deepl_request",
            "method": method.upper(),
            "url": url,
            "sizeHint": size_hint,
            "authKey": redact_key(auth_key),
        },
    )

    kwargs = {"headers": {"Authorization": f"{AUTH_SCHEME} {auth_key}"}}
    if data is not None:
        kwargs["data"] = dict(data)
    return session.request(method.upper(), url, timeout=timeout, **kwargs)


def classify_attempt(
    response: Optional[requests.Response] = None,
    error: Optional[BaseException] = None,
) -> Outcome:
    if error is not None:
        if isinstance(error, requests.Timeout):
            return Outcome(OutcomeKind.RETRYABLE, reason=ErrorKind.TRANSPORT, error=error)
        return Outcome(OutcomeKind.TERMINAL, error=error)

    status = response.status_code
    if status == 429:
        return Outcome(OutcomeKind.RETRYABLE, response=response, reason=ErrorKind.RATE_LIMITED)
    if status >= 500:
        return Outcome(OutcomeKind.RETRYABLE, response=response, reason=ErrorKind.SERVER_OVERLOAD)
    return Outcome(OutcomeKind.SUCCESS, response=response)


def request_with_retry(
    session: requests.Session,
    auth_key: str,
    method: str,
    path: str,
    *,
    logger,
    timeout: float,
    data: Optional[Mapping[str, str]] = None,
    size_hint: int = 0,
    max_attempts: int = MAX_ATTEMPTS,
    free_url: str = FREE_API_URL,
    pro_url: str = PRO_API_URL,
) -> requests.Response:
    """Send a request, retrying 429, 5xx and timeouts.

    Any other status is returned unchecked. Transport errors other than
    timeouts propagate unmodified on the attempt that raised them.
    """
    attempts = min(max(max_attempts, 1), MAX_ATTEMPTS)
    last: Optional[Outcome] = None
    for attempt in range(attempts):
        attempt_start = time.monotonic()
        try:
            response = send_request(
                session,
                auth_key,
                method,
                path,
                logger=logger,
                timeout=timeout,
                data=data,
                size_hint=size_hint,
                free_url=free_url,
                pro_url=pro_url,
            )
            outcome = classify_attempt(response=response)
        except requests.RequestException as exc:
            outcome = classify_attempt(error=exc)

        if outcome.kind is OutcomeKind.TERMINAL:
            raise outcome.error
        if outcome.kind is OutcomeKind.SUCCESS:
            return outcome.response

        last = outcome
        if attempt + 1 >= attempts:
            break
        delay = backoff.compute_delay(attempt, attempt_start)
        logger.warning(
            "deepl_retry",
            extra={
                "event": "deepl_retry",
                "attempt": attempt + 1,
                "reason": outcome.reason.value,
                "statusCode": outcome.response.status_code if outcome.response is not None else None,
                "detail": str(outcome.error) if outcome.error is not None else None,
                "delaySeconds": round(delay, 3),
                "path": path,
            },
        )
        time.sleep(delay)

    status_code = last.response.status_code if last is not None and last.response is not None else None
    reason = last.reason.value if last is not None and last.reason is not None else "unknown"
    raise DeepLError(
        ErrorKind.MAX_RETRIES,
        f"max retries reached after {attempts} attempts (last failure: {reason})",
        status_code=status_code,
        last_failure=last.reason if last is not None else None,
    )
