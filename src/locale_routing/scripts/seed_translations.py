"""
Seed translation files from the keys used in project source files.

Scans the subdirectories of the base path (skipping ignored ones) for
translation calls such as ``__("key")``, ``_("key")`` or ``translate("key")``
and writes one JSON file per locale and first key segment:

    <target>/<locale>/<first segment>.json

Existing translations are preserved. Missing keys are added with the key
itself as placeholder value.

Usage:
    i18n-seed
    i18n-seed --base-path src --target locales --locale de --locale en

    # Settings default to I18N_SEEDER_* / I18N_AVAILABLE_LOCALES env vars
    python -m locale_routing.scripts.seed_translations --extension .html
"""

import argparse
from collections.abc import Iterable, Iterator, Sequence
import json
from pathlib import Path
import re
import sys
from typing import Any

from locale_routing.core.config import get_locale_config, get_seeder_config
from locale_routing.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

TRANSLATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "__()": re.compile(r"""__\(\s*['"]([^'"]+)['"]\s*,?.*?\)"""),
    "_()": re.compile(r"""(?<![\w.])_\(\s*['"]([^'"]+)['"]\s*,?.*?\)"""),
    "translate()": re.compile(r"""\btranslate\(\s*['"]([^'"]+)['"]\s*,?.*?\)"""),
}


def validate_key(key: str) -> bool:
    """A key is accepted when it has no dot, or contains a space."""
    # TODO: confirm with product whether dotted keys such as "messages.welcome"
    # should be accepted; they are currently skipped.
    return "." not in key or " " in key


def get_directories(base_path: Path, ignored_directories: Iterable[str]) -> list[Path]:
    """Immediate subdirectories of base_path whose path has no ignored name in it."""
    ignored = list(ignored_directories)
    return sorted(
        directory
        for directory in base_path.iterdir()
        if directory.is_dir() and not any(name in str(directory) for name in ignored)
    )


def iter_source_files(directory: Path, file_extensions: Iterable[str]) -> Iterator[Path]:
    extensions = set(file_extensions)
    for path in sorted(directory.rglob("*")):
        if path.is_file() and path.suffix in extensions:
            yield path


def parse_file_for_translations(path: Path) -> dict[str, str]:
    content = path.read_text(encoding="utf-8", errors="ignore")
    translations: dict[str, str] = {}

    for pattern in TRANSLATION_PATTERNS.values():
        for key in pattern.findall(content):
            if not validate_key(key):
                logger.error("invalid_translation_key", file=str(path), key=key)
                continue
            translations[key] = key

    return translations


def collect_translations(
    directories: Iterable[Path], file_extensions: Sequence[str]
) -> dict[str, str]:
    translations: dict[str, str] = {}
    for directory in directories:
        for path in iter_source_files(directory, file_extensions):
            translations.update(parse_file_for_translations(path))
    return translations


def lookup(content: dict[str, Any], key: str) -> Any:
    """Value for key, stored flat ("a.b") or nested ({"a": {"b": ...}})."""
    if key in content:
        return content[key]

    value: Any = content
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


def load_translation_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def write_translation_file(path: Path, translations: dict[str, Any]) -> bool:
    """Write the whole file in one call. Returns False on I/O failure."""
    content = json.dumps(translations, ensure_ascii=False, indent=4, sort_keys=True)
    try:
        path.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        logger.error("translation_write_failed", path=str(path), error=str(e))
        return False

    logger.info("translation_file_written", path=str(path), keys=len(translations))
    return True


def build_locale_files(
    locale_path: Path, translations: dict[str, str]
) -> tuple[dict[Path, dict[str, Any]], list[Path]]:
    """Group keys by first segment and merge them with existing file content.

    Returns the files to write and the existing files that could not be
    read. Keys belonging to an unreadable file are left out.
    """
    files: dict[Path, dict[str, Any]] = {}
    existing: dict[Path, dict[str, Any]] = {}
    unreadable: list[Path] = []

    for key, value in translations.items():
        parent, _, child = key.partition(".")
        file_path = locale_path / f"{parent}.json"
        if file_path in unreadable:
            continue
        if file_path not in existing:
            try:
                existing[file_path] = load_translation_file(file_path)
            except (OSError, ValueError) as e:
                logger.error(
                    "translation_read_failed", path=str(file_path), error=str(e)
                )
                unreadable.append(file_path)
                continue

        current = lookup(existing[file_path], child)
        files.setdefault(file_path, {})[child] = current if current is not None else value

    return files, unreadable


def create_files(
    target_directory: Path, locales: Iterable[str], translations: dict[str, str]
) -> bool:
    """Write translation files for every locale. Returns False if any write failed."""
    ok = True

    for locale in locales:
        locale_path = target_directory / locale
        try:
            locale_path.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(
                "translation_directory_failed", path=str(locale_path), error=str(e)
            )
            ok = False
            continue

        files, unreadable = build_locale_files(locale_path, translations)
        if unreadable:
            ok = False

        for path, content in files.items():
            ok = write_translation_file(path, content) and ok

    return ok


def seed_translations(
    base_path: Path,
    target_directory: Path,
    locales: Sequence[str],
    file_extensions: Sequence[str],
    ignored_directories: Sequence[str],
) -> bool:
    directories = get_directories(base_path, ignored_directories)
    translations = collect_translations(directories, file_extensions)

    logger.info(
        "translations_collected",
        directories=len(directories),
        keys=len(translations),
        locales=list(locales),
    )
    return create_files(target_directory, locales, translations)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="i18n-seed",
        description="Seed translation files from project files",
    )
    parser.add_argument("--base-path", type=Path, help="Directory to scan")
    parser.add_argument("--target", type=Path, help="Translation files directory")
    parser.add_argument(
        "--extension",
        action="append",
        dest="extensions",
        help="File extension to scan (repeatable), e.g. .html",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        dest="ignored",
        help="Directory name to skip (repeatable)",
    )
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        help="Locale to seed (repeatable). Defaults to the available locales.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    args = parse_args(argv)
    seeder_config = get_seeder_config()

    extensions = args.extensions or seeder_config.file_extensions
    ok = seed_translations(
        base_path=args.base_path or seeder_config.base_path,
        target_directory=args.target or seeder_config.target_directory,
        locales=args.locales or get_locale_config().available_locales,
        file_extensions=[e if e.startswith(".") else f".{e}" for e in extensions],
        ignored_directories=args.ignored or seeder_config.ignore_directories,
    )
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
