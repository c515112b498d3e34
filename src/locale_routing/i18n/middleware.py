"""Locale middleware: resolve the request locale from the URL.

For every HTTP request the locale is taken from the URL (query parameter,
path segment or subdomain, depending on the configured scheme):
1. No locale in the URL: redirect (302) to the same URL carrying the pinned,
   browser-detected or default locale. The app is never called.
2. Locale not available: respond 404 through the AppException handler.
   The app is never called.
3. Otherwise: make it the active locale for the request, call the app and
   add a Content-Language header to its response.

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729

It works both app-wide (``app.add_middleware``) and per route (attached by
``localized_route``). Rejections are rendered here rather than raised, since
app-wide middleware sits outside Starlette's exception middleware.
"""

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send
import structlog

from locale_routing.core.config import LocaleConfig
from locale_routing.core.context import LOCALE_STATE_KEY, reset_locale, set_locale
from locale_routing.core.exceptions import InvalidLocaleError
from locale_routing.core.logging import get_logger
from locale_routing.handlers import app_exception_handler
from locale_routing.i18n.negotiation import LocaleState, negotiate_locale

logger = get_logger(__name__)


class LocaleMiddleware:
    """Pure ASGI middleware enforcing a valid locale in the request URL.

    Args:
        app: The wrapped ASGI app.
        config: Locale settings, fixed for the lifetime of the middleware.
        locale: Optional pinned locale used as the redirect target when the
            request carries no locale.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: LocaleConfig,
        locale: str | None = None,
    ) -> None:
        self.app = app
        self.config = config
        self.locale = locale

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        decision = negotiate_locale(request, self.config, self.locale)

        if decision.state == LocaleState.REDIRECT_PENDING:
            logger.info(
                "locale_redirect",
                path=request.url.path,
                locale=decision.locale,
                target=decision.redirect_url,
            )
            response = RedirectResponse(decision.redirect_url, status_code=302)
            await response(scope, receive, send)
            return

        if decision.state == LocaleState.REJECTED:
            logger.info(
                "locale_rejected",
                path=request.url.path,
                locale=decision.locale,
            )
            exc = InvalidLocaleError(decision.locale, self.config.available_locales)
            response = await app_exception_handler(request, exc)
            await response(scope, receive, send)
            return

        locale = decision.locale
        token = set_locale(locale)

        # Ensure scope has a state dict so request.state exposes the locale
        if "state" not in scope:
            scope["state"] = {}
        scope["state"][LOCALE_STATE_KEY] = locale

        async def send_with_locale(message: Message) -> None:
            """Wrapper to add Content-Language header to response."""
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(raw=list(message.get("headers", [])))
                response_headers["Content-Language"] = locale
                message["headers"] = response_headers.raw

            await send(message)

        try:
            with structlog.contextvars.bound_contextvars(locale=locale):
                logger.debug("locale_resolved", path=request.url.path)
                await self.app(scope, receive, send_with_locale)
        finally:
            reset_locale(token)
