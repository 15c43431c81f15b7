"""DeepL API client built on the retrying request layer."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Any, Dict, Mapping, Optional

import requests

from .config import Config
from .credential_store import CredentialStore
from .errors import DeepLError, ErrorKind
from .http_utils import request_with_retry
from .response_classifier import check_response


TRANSLATE_PATH = "/v2/translate"
USAGE_PATH = "/v2/usage"


@dataclass(frozen=True)
class Usage:
    character_count: int
    character_limit: int

    def describe(self) -> str:
        return f"{self.character_count} of {self.character_limit} characters used."


class DeepLClient:
    def __init__(
        self,
        config: Config,
        logger,
        credentials: CredentialStore,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.credentials = credentials
        self.session = session or requests.Session()

    def auth_key(self) -> str:
        auth_key = self.credentials.get()
        if not auth_key:
            raise DeepLError(
                ErrorKind.MISSING_CREDENTIAL,
                "No DeepL auth key set, run `deepl-sheets set-key <key>` first",
            )
        return auth_key

    def translate(self, form: Mapping[str, str], size_hint: int) -> str:
        payload = self._call("POST", TRANSLATE_PATH, data=form, size_hint=size_hint, event="deepl_translate")
        translations = payload.get("translations") if isinstance(payload, dict) else None
        first = translations[0] if isinstance(translations, list) and translations else None
        if not isinstance(first, dict) or "text" not in first:
            raise DeepLError(ErrorKind.BAD_RESPONSE, f"Translate response missing translations: {payload}")
        return first["text"]

    def usage(self) -> Usage:
        payload = self._call("GET", USAGE_PATH, event="deepl_usage")
        try:
            return Usage(
                character_count=int(payload["character_count"]),
                character_limit=int(payload["character_limit"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DeepLError(ErrorKind.BAD_RESPONSE, f"Usage response malformed: {payload}") from exc

    def _call(
        self,
        method: str,
        path: str,
        *,
        event: str,
        data: Optional[Mapping[str, str]] = None,
        size_hint: int = 0,
    ) -> Any:
        auth_key = self.auth_key()
        start = time.monotonic()
        success = False
        status_code = None
        error_message = None
        try:
            response = request_with_retry(
                self.session,
                auth_key,
                method,
                path,
                logger=self.logger,
                timeout=self.config.http_timeout,
                data=data,
                size_hint=size_hint,
                max_attempts=self.config.max_attempts,
                free_url=self.config.free_api_url,
                pro_url=self.config.pro_api_url,
            )
            status_code = response.status_code
            check_response(response)
            try:
                payload = response.json()
            except ValueError as exc:
                raise DeepLError(
                    ErrorKind.BAD_RESPONSE,
                    f"Response from {path} is not JSON: {response.text}",
                    status_code=status_code,
                ) from exc
            success = True
            return payload
        except Exception as exc:
            error_message = str(exc)
            raise
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            log_fn = self.logger.info if success else self.logger.error
            extra: Dict[str, Any] = {
                "event": event,
                "durationMs": duration_ms,
                "statusCode": status_code,
                "sizeHint": size_hint,
                "success": success,
            }
            if error_message:
                extra["detail"] = error_message
            log_fn(event, extra=extra)
