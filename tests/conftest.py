from __future__ import annotations

import pytest

from locale_routing.core.config import (
    AddressingScheme,
    LocaleConfig,
    get_locale_config,
    get_seeder_config,
)
from tests.factories import FakeRouteUrls, make_config


@pytest.fixture(autouse=True)
def _isolate_settings_cache(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "I18N_AVAILABLE_LOCALES",
        "I18N_DEFAULT_LOCALE",
        "I18N_FALLBACK_LOCALE",
        "I18N_SCHEME",
        "I18N_PARAM_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    get_locale_config.cache_clear()
    get_seeder_config.cache_clear()
    yield
    get_locale_config.cache_clear()
    get_seeder_config.cache_clear()


@pytest.fixture
def query_config() -> LocaleConfig:
    return make_config(AddressingScheme.QUERY)


@pytest.fixture
def segment_config() -> LocaleConfig:
    return make_config(AddressingScheme.SEGMENT)


@pytest.fixture
def subdomain_config() -> LocaleConfig:
    return make_config(AddressingScheme.SUBDOMAIN)


@pytest.fixture
def fake_routes() -> FakeRouteUrls:
    return FakeRouteUrls()
