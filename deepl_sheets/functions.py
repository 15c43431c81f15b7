"""Spreadsheet-callable translate and usage functions.

Host capabilities (the currently displayed cell text, the locale default
target language) are injected through ``TranslateSettings`` so the functions
run the same way inside a spreadsheet host, the CLI or tests.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .client import DeepLClient
from .errors import invalid_input


DISABLED_TEXT = "Translations disabled."
PLACEHOLDER_VALUES = {"loading...", "#error!", "#name?", "#n/a", "#value!", "#ref!"}
LANG_CODE_RE = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,4})?$")
USAGE_TYPES = {"count", "limit"}


@dataclass(frozen=True)
class TranslateSettings:
    disable_translations: bool = False
    reuse_displayed_value: bool = False
    current_value: Optional[Callable[[], Any]] = None
    default_target_lang: Optional[Callable[[], Optional[str]]] = None


DEFAULT_SETTINGS = TranslateSettings()


def deepl_translate(
    client: DeepLClient,
    text: Any,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
    glossary_id: Optional[str] = None,
    options: Optional[Sequence[Sequence[Any]]] = None,
    settings: Optional[TranslateSettings] = None,
) -> str:
    settings = settings or DEFAULT_SETTINGS
    text = _coerce_text(text)

    if settings.disable_translations:
        return DISABLED_TEXT
    if settings.reuse_displayed_value and settings.current_value is not None:
        displayed = _displayed_value(settings.current_value())
        if displayed:
            return displayed
    if text == "":
        return ""

    if not target_lang and settings.default_target_lang is not None:
        target_lang = settings.default_target_lang()
    if not target_lang:
        raise invalid_input("target_lang is required when no default target language is available")

    form: Dict[str, str] = {"text": text, "target_lang": _lang_code(target_lang, "target_lang")}
    if not _is_auto(source_lang):
        form["source_lang"] = _lang_code(source_lang, "source_lang")
    if glossary_id:
        form["glossary_id"] = str(glossary_id)
    form.update(parse_options(options))

    return client.translate(form, size_hint=len(text))


def deepl_usage(client: DeepLClient, type: Optional[str] = None) -> Union[int, str]:
    if type is not None and type not in USAGE_TYPES:
        raise invalid_input(f"type must be one of 'count', 'limit' or omitted, got {type!r}")

    usage = client.usage()
    if type == "count":
        return usage.character_count
    if type == "limit":
        return usage.character_limit
    return usage.describe()


def parse_options(options: Optional[Sequence[Sequence[Any]]]) -> Dict[str, str]:
    """Turn ``[[key, value], ...]`` rows into form fields; later keys win."""
    if options is None:
        return {}
    if isinstance(options, (str, bytes)) or not isinstance(options, (list, tuple)):
        raise invalid_input("options must be a list of [key, value] pairs")

    fields: Dict[str, str] = {}
    for row in options:
        if isinstance(row, (str, bytes)) or not isinstance(row, (list, tuple)) or len(row) != 2:
            raise invalid_input(f"options must be a list of [key, value] pairs, got {row!r}")
        key, value = row
        if not isinstance(key, str) or not key.strip():
            raise invalid_input(f"option key must be a non-empty string, got {key!r}")
        fields[key.strip()] = _form_value(value)
    return fields


def _coerce_text(text: Any) -> str:
    if isinstance(text, bool) or text is None:
        raise invalid_input("text must be a string or a number")
    if isinstance(text, str):
        return text
    if isinstance(text, (int, float)):
        return str(text)
    raise invalid_input(f"text must be a string or a number, got {type(text).__name__}")


def _is_auto(source_lang: Any) -> bool:
    if source_lang is None:
        return True
    return isinstance(source_lang, str) and source_lang.strip().lower() in ("", "auto")


def _lang_code(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not LANG_CODE_RE.match(value.strip()):
        raise invalid_input(f"{field_name} is not a valid language code: {value!r}")
    return value.strip().upper()


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _displayed_value(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    if text.strip().lower() in PLACEHOLDER_VALUES:
        return ""
    return text
