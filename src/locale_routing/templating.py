"""Jinja2 template helpers for localized pages.

Registered globals (the template context must contain ``request``, which
Starlette's ``Jinja2Templates.TemplateResponse`` always provides):

    {{ alternate("en") }}            one <link> tag, or nothing
    {{ alternates() }}               <link> tags for every other locale
    {{ alternates(["en", "fr"]) }}   <link> tags for the given locales
    {% if is_locale("de") %}...{% endif %}
    {% if unless_locale("de") %}...{% endif %}
"""

from collections.abc import Iterable
from typing import Any

from jinja2 import Environment, pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from locale_routing.core.context import get_locale
from locale_routing.deps import get_alternate_url_generator

LINK_TAG = Markup('<link href="{url}" hreflang="{locale}">')


def alternate_link_tag(url: str | None, locale: str) -> Markup:
    """``<link>`` tag for one alternate URL; empty when there is no URL."""
    if url is None:
        return Markup("")
    return LINK_TAG.format(url=url, locale=locale)


@pass_context
def alternate(context: Context, locale: str) -> Markup:
    generator = get_alternate_url_generator(context["request"])
    return alternate_link_tag(generator.create_alternate_url(locale), locale)


@pass_context
def alternates(context: Context, locales: Iterable[str] | None = None) -> Markup:
    generator = get_alternate_url_generator(context["request"])
    urls = generator.create_alternate_urls(locales)
    return Markup("").join(
        alternate_link_tag(url, locale) for locale, url in urls.items()
    )


def is_locale(value: str) -> bool:
    return get_locale() == value


def unless_locale(value: str) -> bool:
    return get_locale() != value


def register_template_extensions(env: Environment) -> Environment:
    """Add the alternate-link and locale-check helpers to ``env``."""
    helpers: dict[str, Any] = {
        "alternate": alternate,
        "alternates": alternates,
        "is_locale": is_locale,
        "unless_locale": unless_locale,
    }
    env.globals.update(helpers)
    return env
