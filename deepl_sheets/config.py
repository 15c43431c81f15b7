"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

from .http_utils import FREE_API_URL, MAX_ATTEMPTS, PRO_API_URL


@dataclass(frozen=True)
class Config:
    auth_key: Optional[str]
    credential_file: str
    free_api_url: str
    pro_api_url: str
    default_target_lang: Optional[str]
    log_file: Optional[str]
    log_level: str
    http_timeout: float
    max_attempts: int


def load_config() -> Config:
    load_dotenv()

    max_attempts = int(os.getenv("RETRY_MAX_ATTEMPTS", str(MAX_ATTEMPTS)))
    if not 1 <= max_attempts <= MAX_ATTEMPTS:
        raise ValueError(f"RETRY_MAX_ATTEMPTS must be between 1 and {MAX_ATTEMPTS}")
    http_timeout = float(os.getenv("HTTP_TIMEOUT", "30"))
    if http_timeout <= 0:
        raise ValueError("HTTP_TIMEOUT must be positive")

    return Config(
        auth_key=_normalize_optional(os.getenv("DEEPL_AUTH_KEY")),
        credential_file=os.getenv("DEEPL_CREDENTIAL_FILE", "state/credentials.json"),
        free_api_url=os.getenv("DEEPL_FREE_API_URL", FREE_API_URL),
        pro_api_url=os.getenv("DEEPL_PRO_API_URL", PRO_API_URL),
        default_target_lang=_normalize_optional(os.getenv("DEEPL_DEFAULT_TARGET_LANG")),
        log_file=_normalize_optional(os.getenv("LOG_FILE", "logs/deepl.log")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        http_timeout=http_timeout,
        max_attempts=max_attempts,
    )


def _normalize_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned if cleaned else None
