"""CLI entrypoint for the DeepL spreadsheet functions."""

from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path
from typing import List, Optional

import requests

from .client import DeepLClient
from .config import Config, load_config
from .credential_store import CredentialStore, FileCredentialStore, MemoryCredentialStore
from .errors import DeepLError
from .functions import TranslateSettings, deepl_translate, deepl_usage
from .logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deepl-sheets", description="DeepL translate and usage functions")
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate_parser = subparsers.add_parser("translate", help="Translate text")
    translate_parser.add_argument("text", help="Text to translate")
    translate_parser.add_argument("--source", help="Source language code, or 'auto'")
    translate_parser.add_argument("--target", help="Target language code")
    translate_parser.add_argument("--glossary", help="Glossary id")
    translate_parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra request field, may be repeated",
    )

    usage_parser = subparsers.add_parser("usage", help="Show character usage")
    usage_parser.add_argument("--type", choices=["count", "limit"], help="Return only count or limit")

    set_key_parser = subparsers.add_parser("set-key", help="Store the DeepL auth key")
    set_key_parser.add_argument("key", help="DeepL auth key")

    subparsers.add_parser("delete-key", help="Remove the stored DeepL auth key")
    return parser


def parse_option_pairs(values: List[str]) -> List[List[str]]:
    pairs = []
    for value in values:
        key, sep, option_value = value.partition("=")
        if not sep or not key:
            raise ValueError(f"Option must look like key=value: {value}")
        pairs.append([key, option_value])
    return pairs


def build_credential_store(config: Config) -> CredentialStore:
    if config.auth_key:
        return MemoryCredentialStore(config.auth_key)
    return FileCredentialStore(Path(config.credential_file))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    logger = setup_logging(config.log_file, config.log_level, str(uuid.uuid4()))
    key_file = FileCredentialStore(Path(config.credential_file))

    if args.command == "set-key":
        try:
            key_file.set(args.key)
        except DeepLError as exc:
            print(exc.message)
            return 2
        print("Auth key stored.")
        return 0

    try:
        if args.command == "delete-key":
            key_file.delete()
            print("Auth key removed.")
            return 0

        client = DeepLClient(config, logger, build_credential_store(config))
        if args.command == "translate":
            try:
                options = parse_option_pairs(args.option)
            except ValueError as exc:
                print(str(exc))
                return 2
            settings = TranslateSettings(default_target_lang=lambda: config.default_target_lang)
            print(
                deepl_translate(
                    client,
                    args.text,
                    source_lang=args.source,
                    target_lang=args.target,
                    glossary_id=args.glossary,
                    options=options or None,
                    settings=settings,
                )
            )
            return 0

        if args.command == "usage":
            print(deepl_usage(client, args.type))
            return 0
    except DeepLError as exc:
        logger.error("command_failed", extra={"event": "command_failed", "kind": exc.kind.value, "detail": exc.message})
        print(f"Error: {exc.message}")
        return 1
    except requests.RequestException as exc:
        logger.error("command_failed", extra={"event": "command_failed", "kind": "transport", "detail": str(exc)})
        print(f"Error: request to DeepL failed: {exc}")
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
