from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection, Request

from locale_routing.core.config import LocaleConfig
from locale_routing.core.context import get_locale
from locale_routing.i18n.alternate import AlternateUrlGenerator
from locale_routing.i18n.routing import StarletteRouteUrls

LOCALE_CONFIG_STATE_KEY = "locale_config"


def get_app_locale_config(conn: HTTPConnection) -> LocaleConfig:
    """The LocaleConfig registered on the app by ``init_app``."""
    config = getattr(conn.app.state, LOCALE_CONFIG_STATE_KEY, None)
    if config is None:
        raise RuntimeError(
            "No LocaleConfig registered on this app. Call init_app(app, config) first."
        )
    return config


def get_alternate_url_generator(conn: HTTPConnection) -> AlternateUrlGenerator:
    return AlternateUrlGenerator(
        get_app_locale_config(conn),
        StarletteRouteUrls(conn),
        current_locale=get_locale(),
    )


def _locale_config_dep(request: Request) -> LocaleConfig:
    return get_app_locale_config(request)


def _alternate_url_generator_dep(request: Request) -> AlternateUrlGenerator:
    return get_alternate_url_generator(request)


LocaleConfigDep = Annotated[LocaleConfig, Depends(_locale_config_dep)]
AlternateUrlGeneratorDep = Annotated[
    AlternateUrlGenerator, Depends(_alternate_url_generator_dep)
]


def alternate_url(
    conn: HTTPConnection, locale: str, route_name: str | None = None
) -> str | None:
    """Shortcut for ``create_alternate_url`` in plain Starlette endpoints."""
    return get_alternate_url_generator(conn).create_alternate_url(locale, route_name)


def alternate_urls(
    conn: HTTPConnection,
    locales: Iterable[str] | None = None,
    route_name: str | None = None,
) -> dict[str, str | None]:
    return get_alternate_url_generator(conn).create_alternate_urls(locales, route_name)
