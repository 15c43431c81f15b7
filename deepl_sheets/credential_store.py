"""Storage for the DeepL auth key."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Optional, Protocol

from .errors import DeepLError, ErrorKind, invalid_input


AUTH_KEY_NAME = "DEEPL_AUTH_KEY"


class CredentialStore(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, auth_key: str) -> None: ...

    def delete(self) -> None: ...


def _clean_key(auth_key: str) -> str:
    if not isinstance(auth_key, str) or not auth_key.strip():
        raise invalid_input("auth key must be a non-empty string")
    return auth_key.strip()


@dataclass
class MemoryCredentialStore:
    auth_key: Optional[str] = None

    def get(self) -> Optional[str]:
        return self.auth_key or None

    def set(self, auth_key: str) -> None:
        self.auth_key = _clean_key(auth_key)

    def delete(self) -> None:
        self.auth_key = None


@dataclass
class FileCredentialStore:
    path: Path

    def get(self) -> Optional[str]:
        data = self._read()
        return data.get(AUTH_KEY_NAME) or None

    def set(self, auth_key: str) -> None:
        auth_key = _clean_key(auth_key)
        try:
            data = self._read()
        except DeepLError:
            # a corrupt file is replaced by the new key
            data = {}
        data[AUTH_KEY_NAME] = auth_key
        self._write(data)

    def delete(self) -> None:
        data = self._read()
        if data.pop(AUTH_KEY_NAME, None) is not None:
            self._write(data)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise DeepLError(
                ErrorKind.MISSING_CREDENTIAL,
                f"Credential file {self.path} is not valid JSON, run `deepl-sheets set-key <key>` again",
            ) from exc
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=True, indent=2), encoding="utf-8")
