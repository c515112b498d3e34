from __future__ import annotations

from fastapi import FastAPI
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Mount, Route

from locale_routing.core.config import AddressingScheme
from locale_routing.i18n import LocaleMiddleware, localized_route
from locale_routing.integration import init_app
from tests.factories import (
    build_localized_app,
    build_middleware_app,
    make_client,
    make_config,
    recording_endpoint,
)

BROWSER_ES = {"Accept-Language": "es-es,es;q=0.5"}
BROWSER_UNKNOWN = {"Accept-Language": "xx-xx,xx;q=0.5"}


def _client(scheme: AddressingScheme, **overrides):
    endpoint, calls = recording_endpoint()
    app = build_middleware_app(make_config(scheme, **overrides), endpoint)
    return make_client(app), calls


def _redirect_target(scheme: AddressingScheme, headers=None, **overrides) -> str:
    client, calls = _client(scheme, **overrides)
    resp = client.get("/example", headers=headers)
    assert resp.status_code == 302
    assert calls == []
    return resp.headers["location"]


# query


def test_query_redirects_to_default_locale_without_auto_detect() -> None:
    target = _redirect_target(AddressingScheme.QUERY)
    assert target == "http://localhost/example?lang=de"


def test_query_redirects_to_browser_locale_with_auto_detect() -> None:
    target = _redirect_target(
        AddressingScheme.QUERY, headers=BROWSER_ES, auto_detect_enabled=True
    )
    assert target == "http://localhost/example?lang=es"


def test_query_redirects_to_default_when_browser_locale_unavailable() -> None:
    target = _redirect_target(
        AddressingScheme.QUERY, headers=BROWSER_UNKNOWN, auto_detect_enabled=True
    )
    assert target == "http://localhost/example?lang=de"


def test_query_redirect_keeps_other_query_parameters() -> None:
    client, calls = _client(AddressingScheme.QUERY)
    resp = client.get("/example?page=2&sort=name")
    assert resp.status_code == 302
    assert resp.headers["location"] == "http://localhost/example?page=2&sort=name&lang=de"


def test_query_rejects_unavailable_locale() -> None:
    client, calls = _client(AddressingScheme.QUERY)
    resp = client.get("/example?lang=xx")
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "LOCALE_NOT_FOUND"
    assert resp.json()["details"]["locale"] == "xx"
    assert calls == []


def test_query_resolved_locale_reaches_handler() -> None:
    client, calls = _client(AddressingScheme.QUERY)
    resp = client.get("/example?lang=en")
    assert resp.status_code == 200
    assert resp.text == "Example"
    assert resp.headers["content-language"] == "en"
    assert calls == [("en", "en")]


def test_query_redirect_target_resolves_to_the_same_locale() -> None:
    client, calls = _client(AddressingScheme.QUERY)
    target = client.get("/example").headers["location"]
    resp = client.get(target)
    assert resp.status_code == 200
    assert calls == [("de", "de")]


# segment


def test_segment_redirects_to_default_locale_without_auto_detect() -> None:
    target = _redirect_target(AddressingScheme.SEGMENT)
    assert target == "http://localhost/de/example"


def test_segment_redirects_to_browser_locale_with_auto_detect() -> None:
    target = _redirect_target(
        AddressingScheme.SEGMENT, headers=BROWSER_ES, auto_detect_enabled=True
    )
    assert target == "http://localhost/es/example"


def test_segment_redirects_to_default_when_browser_locale_unavailable() -> None:
    target = _redirect_target(
        AddressingScheme.SEGMENT, headers=BROWSER_UNKNOWN, auto_detect_enabled=True
    )
    assert target == "http://localhost/de/example"


def test_segment_rejects_unavailable_locale() -> None:
    client, calls = _client(AddressingScheme.SEGMENT)
    resp = client.get("/xx/example")
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "LOCALE_NOT_FOUND"
    assert calls == []


def test_segment_resolved_locale_reaches_handler() -> None:
    client, calls = _client(AddressingScheme.SEGMENT)
    resp = client.get("/fr/example")
    assert resp.status_code == 200
    assert resp.headers["content-language"] == "fr"
    assert calls == [("fr", "fr")]


# subdomain


def test_subdomain_redirects_to_default_locale_without_auto_detect() -> None:
    target = _redirect_target(AddressingScheme.SUBDOMAIN)
    assert target == "http://de.localhost/example"


def test_subdomain_redirects_to_browser_locale_with_auto_detect() -> None:
    target = _redirect_target(
        AddressingScheme.SUBDOMAIN, headers=BROWSER_ES, auto_detect_enabled=True
    )
    assert target == "http://es.localhost/example"


def test_subdomain_redirects_to_default_when_browser_locale_unavailable() -> None:
    target = _redirect_target(
        AddressingScheme.SUBDOMAIN, headers=BROWSER_UNKNOWN, auto_detect_enabled=True
    )
    assert target == "http://de.localhost/example"


def test_subdomain_rejects_unavailable_locale() -> None:
    client, calls = _client(AddressingScheme.SUBDOMAIN)
    resp = client.get("http://xx.localhost/example")
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "LOCALE_NOT_FOUND"
    assert calls == []


def test_subdomain_resolved_locale_reaches_handler() -> None:
    client, calls = _client(AddressingScheme.SUBDOMAIN)
    resp = client.get("http://en.localhost/example")
    assert resp.status_code == 200
    assert calls == [("en", "en")]


# localized routes


def test_localized_segment_route_serves_and_rejects() -> None:
    client = make_client(build_localized_app(make_config(AddressingScheme.SEGMENT)))

    ok = client.get("/en/example")
    assert ok.status_code == 200
    assert ok.headers["content-language"] == "en"

    rejected = client.get("/xx/example")
    assert rejected.status_code == 404
    assert rejected.json()["error_code"] == "LOCALE_NOT_FOUND"


def test_localized_query_route_redirects_without_locale() -> None:
    client = make_client(build_localized_app(make_config(AddressingScheme.QUERY)))
    resp = client.get("/example")
    assert resp.status_code == 302
    assert resp.headers["location"] == "http://localhost/example?lang=de"


def test_localized_subdomain_route_matches_locale_hosts_only() -> None:
    client = make_client(build_localized_app(make_config(AddressingScheme.SUBDOMAIN)))

    assert client.get("http://es.localhost/example").status_code == 200

    rejected = client.get("http://xx.localhost/example")
    assert rejected.status_code == 404
    assert rejected.json()["error_code"] == "LOCALE_NOT_FOUND"

    # Not a "{locale}.localhost" host: no route matches
    unmatched = client.get("http://localhost/example")
    assert unmatched.status_code == 404
    assert "error_code" not in unmatched.json()


def test_localized_segment_route_under_mount() -> None:
    config = make_config(AddressingScheme.SEGMENT)
    endpoint, calls = recording_endpoint()
    app = FastAPI(
        routes=[
            Mount(
                "/site",
                routes=[localized_route("/example", endpoint, config=config, name="example")],
            )
        ]
    )
    init_app(app, config)
    client = make_client(app)

    ok = client.get("/site/en/example")
    assert ok.status_code == 200
    assert ok.headers["content-language"] == "en"
    assert calls == [("en", "en")]

    rejected = client.get("/site/xx/example")
    assert rejected.status_code == 404
    assert rejected.json()["error_code"] == "LOCALE_NOT_FOUND"


def test_app_wide_segment_redirect_under_mount() -> None:
    config = make_config(AddressingScheme.SEGMENT)
    endpoint, calls = recording_endpoint()
    site = Starlette(
        routes=[Route("/example", endpoint), Route("/{locale}/example", endpoint)],
        middleware=[Middleware(LocaleMiddleware, config=config)],
    )
    app = FastAPI(routes=[Mount("/site", app=site)])
    init_app(app, config)
    client = make_client(app)

    resp = client.get("/site/example")
    assert resp.status_code == 302
    assert resp.headers["location"] == "http://localhost/site/de/example"

    assert client.get(resp.headers["location"]).status_code == 200
    assert calls == [("de", "de")]


def test_pinned_locale_is_the_redirect_target_only() -> None:
    config = make_config(AddressingScheme.QUERY)
    endpoint, calls = recording_endpoint()
    app = FastAPI(
        routes=[localized_route("/example", endpoint, config=config, locale="fr")]
    )
    init_app(app, config)
    client = make_client(app)

    resp = client.get("/example", headers=BROWSER_ES)
    assert resp.status_code == 302
    assert resp.headers["location"] == "http://localhost/example?lang=fr"

    # Other available locales are still served
    assert client.get("/example?lang=en").status_code == 200
    assert calls == [("en", "en")]
