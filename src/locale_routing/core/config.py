from enum import StrEnum
from functools import lru_cache
import json
from pathlib import Path
from typing import Annotated, Any, Literal
import warnings

from pydantic import BeforeValidator, PositiveInt, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AddressingScheme(StrEnum):
    """Where in the URL the active locale is carried."""

    QUERY = "query"
    SEGMENT = "segment"
    SUBDOMAIN = "subdomain"


class AutoDetectMethod(StrEnum):
    BROWSER = "browser"


def parse_list(v: Any) -> list[str] | Any:
    """Accept "de|en", "de,en" or a JSON list from the environment."""
    if isinstance(v, str):
        v = v.strip()
        if v.startswith("["):
            return json.loads(v)
        separator = "|" if "|" in v else ","
        return [i.strip() for i in v.split(separator) if i.strip()]
    return v


StrList = Annotated[list[str], NoDecode, BeforeValidator(parse_list)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    DEBUG: bool = False
    # Overrides the DEBUG-derived level when set, e.g. "WARNING"
    LOG_LEVEL: str | None = None

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"


class LocaleConfig(BaseSettings):
    """Locale negotiation settings, read once and treated as read-only.

    Every field can be set through an ``I18N_``-prefixed environment
    variable, e.g. ``I18N_AVAILABLE_LOCALES="de|en|fr"`` or
    ``I18N_SCHEME=query``.
    """

    model_config = SettingsConfigDict(
        env_prefix="I18N_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    available_locales: StrList = ["de", "en"]
    default_locale: str = "en"
    fallback_locale: str = "en"

    auto_detect_enabled: bool = True
    auto_detect_method: AutoDetectMethod = AutoDetectMethod.BROWSER

    scheme: AddressingScheme = AddressingScheme.SEGMENT
    param_name: str = "locale"
    # 1-based, as in the path "/<segment 1>/<segment 2>"
    segment_index: PositiveInt = 1

    # Base host for subdomain routes: "{locale}.<domain>"
    domain: str = "localhost"

    @field_validator("available_locales", mode="after")
    @classmethod
    def validate_unique_locales(cls, v: list[str]) -> list[str]:
        """Reject duplicate codes; order is kept as iteration priority."""
        duplicates = sorted({code for code in v if v.count(code) > 1})
        if duplicates:
            raise ValueError(f"Duplicate locales in available_locales: {duplicates}")
        return v

    @model_validator(mode="after")
    def warn_unavailable_defaults(self) -> "LocaleConfig":
        for field in ("default_locale", "fallback_locale"):
            code = getattr(self, field)
            if code not in self.available_locales:
                warnings.warn(
                    f"{field} '{code}' is not in available_locales "
                    f"{self.available_locales}. Requests redirected to it will "
                    "be rejected.",
                    UserWarning,
                    stacklevel=2,
                )
        return self


class SeederConfig(BaseSettings):
    """Settings for the translation file seeder (``i18n-seed``)."""

    model_config = SettingsConfigDict(
        env_prefix="I18N_SEEDER_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    base_path: Path = Path(".")
    file_extensions: StrList = [".py", ".html", ".jinja", ".jinja2"]
    ignore_directories: StrList = [
        "node_modules",
        ".venv",
        "venv",
        ".git",
        "__pycache__",
    ]
    target_directory: Path = Path("locales")

    @field_validator("file_extensions", mode="after")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_locale_config() -> LocaleConfig:
    return LocaleConfig()


@lru_cache
def get_seeder_config() -> SeederConfig:
    return SeederConfig()
