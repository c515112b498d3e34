"""Request-scoped active locale using contextvars.

The locale resolved by ``LocaleMiddleware`` is visible to everything running
inside the same request: async endpoints share the context directly and sync
endpoints get a copy of it in the threadpool. The middleware also records the
locale in ``request.state`` so it can be read from a ``Request`` object.
"""

from contextvars import ContextVar, Token

from starlette.requests import HTTPConnection

# No default: outside a localized request there is no active locale
_locale_context: ContextVar[str | None] = ContextVar("locale", default=None)

# Key used in request state for locale
LOCALE_STATE_KEY = "locale"


def get_locale(default: str | None = None) -> str | None:
    """Get the active locale of the current request, or ``default``."""
    locale = _locale_context.get()
    return locale if locale is not None else default


def set_locale(locale: str) -> Token[str | None]:
    """Set the active locale for the current request context.

    Args:
        locale: The locale code (e.g., "en", "de")

    Returns:
        Token that can be used with reset_locale to restore previous value.
    """
    return _locale_context.set(locale)


def reset_locale(token: Token[str | None]) -> None:
    """Reset the locale to its previous value.

    Args:
        token: The token returned from set_locale.
    """
    _locale_context.reset(token)


def get_request_locale(conn: HTTPConnection) -> str | None:
    """Read the locale the middleware stored on the request state."""
    return conn.scope.get("state", {}).get(LOCALE_STATE_KEY)
