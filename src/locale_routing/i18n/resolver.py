"""Extract the requested locale from a request URL.

The candidate is taken from wherever the configured addressing scheme puts
it. A candidate counts as present when it is exactly two characters long or
is one of the available locales; whether it is actually available is decided
later, so "xx" is present (and then rejected) while "localhost" is absent
(and then redirected).
"""

from collections.abc import Collection

from starlette.requests import HTTPConnection

from locale_routing.core.config import AddressingScheme, LocaleConfig


def is_locale_candidate(value: str | None, available: Collection[str]) -> bool:
    if not value:
        return False
    return len(value) == 2 or value in available


def path_segments(path: str) -> list[str]:
    """Non-empty path segments: "/de/example/" -> ["de", "example"]."""
    return [segment for segment in path.split("/") if segment]


def split_root_path(conn: HTTPConnection) -> tuple[str, str]:
    """Split the request path into the mount prefix and the path below it.

    Segments are counted below the app or Mount serving ``conn``: a route
    mounted at "/site" sees "/site/en/example" as ("/site", "/en/example").
    """
    path: str = conn.scope["path"]
    root_path: str = conn.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        rest = path[len(root_path) :]
        if not rest or rest.startswith("/"):
            return root_path, rest or "/"
    return "", path


def _raw_locale(conn: HTTPConnection, config: LocaleConfig) -> str | None:
    match config.scheme:
        case AddressingScheme.QUERY:
            return conn.query_params.get(config.param_name)
        case AddressingScheme.SEGMENT:
            segments = path_segments(split_root_path(conn)[1])
            index = config.segment_index - 1
            return segments[index] if index < len(segments) else None
        case AddressingScheme.SUBDOMAIN:
            host = conn.url.hostname or ""
            return host.split(".")[0]
        case _:
            return None


def resolve_locale(conn: HTTPConnection, config: LocaleConfig) -> str | None:
    """Return the locale candidate carried by the request URL, if any.

    Pure function of the request and config; the request is not modified.
    """
    locale = _raw_locale(conn, config)
    return locale if is_locale_candidate(locale, config.available_locales) else None
