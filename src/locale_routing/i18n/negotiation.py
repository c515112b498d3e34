from dataclasses import dataclass
from enum import StrEnum

from starlette.requests import HTTPConnection

from locale_routing.core.config import LocaleConfig
from locale_routing.i18n.redirect import build_redirect_url
from locale_routing.i18n.registry import LocaleRegistry
from locale_routing.i18n.resolver import resolve_locale


class LocaleState(StrEnum):
    RESOLVED = "resolved"
    REDIRECT_PENDING = "redirect_pending"
    REJECTED = "rejected"


@dataclass(frozen=True)
class LocaleDecision:
    """Outcome of negotiating one request. All states are terminal."""

    state: LocaleState
    locale: str
    redirect_url: str | None = None


def negotiate_locale(
    conn: HTTPConnection,
    config: LocaleConfig,
    locale: str | None = None,
) -> LocaleDecision:
    """Decide whether a request is served, redirected or rejected.

    - No locale in the URL: redirect to the same URL carrying ``locale`` if
      given, else the browser-detected locale (when auto-detect is on),
      else the default locale.
    - A locale that is not available: reject.
    - Otherwise: resolved.
    """
    registry = LocaleRegistry(config)
    requested = resolve_locale(conn, config)

    if requested is None:
        target = locale or registry.redirect_locale(conn.headers)
        return LocaleDecision(
            LocaleState.REDIRECT_PENDING,
            target,
            build_redirect_url(conn, target, config),
        )

    if not registry.is_available(requested):
        return LocaleDecision(LocaleState.REJECTED, requested)

    return LocaleDecision(LocaleState.RESOLVED, requested)
