"""Alternate URLs: the current (or a named) page in another locale.

Used for language switchers and ``<link rel="alternate" hreflang>`` tags.
"""

from collections.abc import Iterable

from locale_routing.core.config import AddressingScheme, LocaleConfig
from locale_routing.i18n.routing import RouteUrls


class AlternateUrlGenerator:
    """Generate URLs for a route with the locale parameter swapped.

    Args:
        config: Locale settings.
        routes: Routing collaborator for the current request.
        current_locale: The request's active locale, skipped when
            generating alternates in bulk.
    """

    def __init__(
        self,
        config: LocaleConfig,
        routes: RouteUrls,
        current_locale: str | None = None,
    ) -> None:
        self.config = config
        self.routes = routes
        self.current_locale = current_locale

    def create_alternate_url(
        self,
        locale: str,
        route_name: str | None = None,
        absolute: bool = True,
    ) -> str | None:
        """URL of ``route_name`` (default: the current route) in ``locale``.

        Returns None when ``locale`` is not available, or when a relative URL
        is requested under the subdomain scheme, where the locale lives in
        the host. Route resolution errors propagate.
        """
        if locale not in self.config.available_locales:
            return None
        if self.config.scheme == AddressingScheme.SUBDOMAIN and not absolute:
            return None

        name = route_name or self.routes.current_route_name()
        # The requested locale overrides a locale bound on the current route
        params = {
            **self.routes.current_route_parameters(),
            self.config.param_name: locale,
        }

        return self.routes.generate_url(name, params, absolute)

    def create_alternate_urls(
        self,
        locales: Iterable[str] | None = None,
        route_name: str | None = None,
    ) -> dict[str, str | None]:
        """Absolute alternate URLs keyed by locale.

        Defaults to all available locales. The current locale is skipped;
        a locale without an alternate maps to None.
        """
        alternate_locales = list(locales or []) or list(self.config.available_locales)

        return {
            locale: self.create_alternate_url(locale, route_name)
            for locale in alternate_locales
            if locale != self.current_locale
        }
