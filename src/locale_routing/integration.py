"""Wire locale routing into a Starlette or FastAPI application."""

from starlette.applications import Starlette
from starlette.templating import Jinja2Templates

from locale_routing.core.config import LocaleConfig, get_locale_config
from locale_routing.core.exceptions import AppException
from locale_routing.core.logging import get_logger
from locale_routing.deps import LOCALE_CONFIG_STATE_KEY
from locale_routing.handlers import app_exception_handler
from locale_routing.templating import register_template_extensions

logger = get_logger(__name__)


def init_app(
    app: Starlette,
    config: LocaleConfig | None = None,
    templates: Jinja2Templates | None = None,
) -> LocaleConfig:
    """Register locale routing on ``app``.

    - Stores ``config`` (default: loaded from ``I18N_*`` environment
      variables) on ``app.state`` for dependencies and template helpers.
    - Renders AppException subclasses as JSON responses.
    - Adds the alternate-link helpers to ``templates`` if given.

    Routes still opt in individually through ``localized_route``, or
    app-wide with ``app.add_middleware(LocaleMiddleware, config=config)``.
    """
    config = config or get_locale_config()
    setattr(app.state, LOCALE_CONFIG_STATE_KEY, config)

    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]

    if templates is not None:
        register_template_extensions(templates.env)

    logger.info(
        "locale_routing_initialized",
        scheme=config.scheme.value,
        available_locales=config.available_locales,
        default_locale=config.default_locale,
        auto_detect=config.auto_detect_enabled,
    )
    return config
