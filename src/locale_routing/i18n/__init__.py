"""Locale negotiation and localized URLs.

Resolves a request's locale from its URL (query parameter, path segment or
subdomain), redirects requests without one, rejects unavailable locales and
generates alternate URLs of the same route in other locales.
"""

from locale_routing.i18n.alternate import AlternateUrlGenerator
from locale_routing.i18n.detector import detect_from_header
from locale_routing.i18n.middleware import LocaleMiddleware
from locale_routing.i18n.negotiation import LocaleDecision, LocaleState, negotiate_locale
from locale_routing.i18n.redirect import build_redirect_url
from locale_routing.i18n.registry import LocaleRegistry
from locale_routing.i18n.resolver import is_locale_candidate, resolve_locale
from locale_routing.i18n.routing import RouteUrls, StarletteRouteUrls, localized_route

__all__ = [
    "AlternateUrlGenerator",
    "LocaleDecision",
    "LocaleMiddleware",
    "LocaleRegistry",
    "LocaleState",
    "RouteUrls",
    "StarletteRouteUrls",
    "build_redirect_url",
    "detect_from_header",
    "is_locale_candidate",
    "localized_route",
    "negotiate_locale",
    "resolve_locale",
]
