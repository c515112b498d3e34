"""Route lookup and localized route construction on top of Starlette routing."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol

from starlette.datastructures import URL, Headers, URLPath
from starlette.middleware import Middleware
from starlette.requests import HTTPConnection
from starlette.routing import (
    BaseRoute,
    Host,
    Match,
    Mount,
    NoMatchFound,
    Route,
    Router,
    compile_path,
    replace_params,
)
from starlette.types import Scope

from locale_routing.core.config import AddressingScheme, LocaleConfig
from locale_routing.i18n.middleware import LocaleMiddleware


class RouteUrls(Protocol):
    """What alternate URL generation needs from the routing layer."""

    def current_route_name(self) -> str | None: ...

    def current_route_parameters(self) -> Mapping[str, Any]: ...

    def generate_url(
        self, name: str | None, params: Mapping[str, Any], absolute: bool = True
    ) -> str: ...


def _child_routes(route: BaseRoute) -> list[BaseRoute] | None:
    if isinstance(route, Mount | Host):
        return list(route.routes)
    return None


def find_route_params(
    routes: Iterable[BaseRoute], name: str, prefix: str = ""
) -> list[str] | None:
    """Path (and host) parameter names declared by the route called ``name``.

    Mount and Host parameters are included. Returns None if no route has
    that name.
    """
    for route in routes:
        children = _child_routes(route)
        route_name = getattr(route, "name", None)
        if children is not None:
            child_prefix = f"{prefix}{route_name}:" if route_name else prefix
            found = find_route_params(children, name, child_prefix)
            if found is not None:
                return [*getattr(route, "param_convertors", {}), *found]
        elif route_name is not None and f"{prefix}{route_name}" == name:
            return list(getattr(route, "param_convertors", {}))
    return None


def find_route_name(
    routes: Iterable[BaseRoute], endpoint: Callable[..., Any], prefix: str = ""
) -> str | None:
    """Full name of the route serving ``endpoint``, e.g. "site:example"."""
    for route in routes:
        children = _child_routes(route)
        route_name = getattr(route, "name", None)
        if children is not None:
            child_prefix = f"{prefix}{route_name}:" if route_name else prefix
            found = find_route_name(children, endpoint, child_prefix)
            if found is not None:
                return found
        elif getattr(route, "endpoint", None) is endpoint and route_name:
            return f"{prefix}{route_name}"
    return None


class StarletteRouteUrls:
    """RouteUrls backed by the router of the app handling ``conn``."""

    def __init__(self, conn: HTTPConnection) -> None:
        self.conn = conn

    @property
    def router(self) -> Router:
        return self.conn.app.router

    def current_route_name(self) -> str | None:
        route = self.conn.scope.get("route")
        if route is not None and getattr(route, "name", None):
            return find_route_name(self.router.routes, route.endpoint) or route.name

        endpoint = self.conn.scope.get("endpoint")
        if endpoint is None:
            return None
        return find_route_name(self.router.routes, endpoint)

    def current_route_parameters(self) -> Mapping[str, Any]:
        return dict(self.conn.scope.get("path_params", {}))

    def generate_url(
        self, name: str | None, params: Mapping[str, Any], absolute: bool = True
    ) -> str:
        """URL of a named route.

        Parameters the route does not declare are appended as query
        parameters. Raises ``NoMatchFound`` if the route cannot be resolved.
        """
        declared = set(find_route_params(self.router.routes, name or "") or ())
        path_params = {k: v for k, v in params.items() if k in declared}
        query_params = {k: v for k, v in params.items() if k not in declared}

        url_path = self.router.url_path_for(name or "", **path_params)
        if absolute:
            url = url_path.make_absolute_url(base_url=self.conn.base_url)
        else:
            url = URL(str(url_path))

        if query_params:
            url = url.include_query_params(**query_params)
        return str(url)


class SubdomainRoute(Route):
    """A Route that also requires the request host to match ``host``.

    ``host`` may hold parameters, e.g. "{locale}.example.com". Host
    parameters are merged into ``path_params`` and are required by
    ``url_path_for``, which returns a URLPath carrying the host.
    """

    def __init__(
        self, path: str, endpoint: Callable[..., Any], *, host: str, **kwargs: Any
    ) -> None:
        super().__init__(path, endpoint, **kwargs)
        self.host = host
        self.host_regex, self.host_format, host_convertors = compile_path(host)
        self.host_param_names = set(host_convertors)
        self.param_convertors = {**host_convertors, **self.param_convertors}

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        if scope["type"] != "http":
            return Match.NONE, {}

        host = Headers(scope=scope).get("host", "").split(":")[0]
        host_match = self.host_regex.match(host)
        if host_match is None:
            return Match.NONE, {}

        match, child_scope = super().matches(scope)
        if match != Match.NONE:
            host_params = {
                key: self.param_convertors[key].convert(value)
                for key, value in host_match.groupdict().items()
            }
            child_scope["path_params"] = {**host_params, **child_scope["path_params"]}
        return match, child_scope

    def url_path_for(self, name: str, /, **path_params: Any) -> URLPath:
        if name != self.name or set(path_params) != set(self.param_convertors):
            raise NoMatchFound(name, path_params)

        host_params = {k: v for k, v in path_params.items() if k in self.host_param_names}
        route_params = {
            k: v for k, v in path_params.items() if k not in self.host_param_names
        }
        host, _ = replace_params(self.host_format, self.param_convertors, host_params)
        path, _ = replace_params(self.path_format, self.param_convertors, route_params)
        return URLPath(path=path, protocol="http", host=host)


def localized_route(
    path: str,
    endpoint: Callable[..., Any],
    *,
    config: LocaleConfig,
    name: str | None = None,
    locale: str | None = None,
    methods: Sequence[str] | None = None,
    middleware: Sequence[Middleware] | None = None,
) -> BaseRoute:
    """Build a route that only serves requests with a valid locale.

    ``LocaleMiddleware`` is attached to the route, and the route pattern is
    shaped for the addressing scheme:

    - segment: ``/{locale}`` is prepended to ``path``;
    - query: ``path`` is unchanged;
    - subdomain: the route also requires the host "{locale}.<domain>".

    A pinned ``locale`` is the redirect target for requests carrying no
    locale, and for subdomains it fixes the host to ``<locale>.<domain>``.
    """
    param = config.param_name
    route_middleware = [
        Middleware(LocaleMiddleware, config=config, locale=locale),
        *(middleware or []),
    ]

    if config.scheme == AddressingScheme.SEGMENT:
        path = f"/{{{param}}}" + ("" if path == "/" else path)

    if config.scheme == AddressingScheme.SUBDOMAIN:
        subdomain = locale or f"{{{param}}}"
        return SubdomainRoute(
            path,
            endpoint,
            host=f"{subdomain}.{config.domain}",
            methods=methods,
            name=name,
            middleware=route_middleware,
        )

    return Route(
        path,
        endpoint,
        methods=methods,
        name=name,
        middleware=route_middleware,
    )
