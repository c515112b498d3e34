"""Rewrite a request URL so it carries a locale.

Only used for requests whose URL has no locale yet, so nothing is replaced
or stripped: the segment is inserted and the subdomain is prepended.
"""

from starlette.requests import HTTPConnection

from locale_routing.core.config import AddressingScheme, LocaleConfig
from locale_routing.i18n.resolver import path_segments, split_root_path


def _with_query_param(conn: HTTPConnection, locale: str, config: LocaleConfig) -> str:
    # Other query parameters keep their relative order
    return str(conn.url.include_query_params(**{config.param_name: locale}))


def _with_segment(conn: HTTPConnection, locale: str, config: LocaleConfig) -> str:
    prefix, path = split_root_path(conn)
    segments = path_segments(path)
    segments.insert(config.segment_index - 1, locale)
    # The query string is not carried over
    return str(conn.url.replace(path=f"{prefix}/{'/'.join(segments)}", query=""))


def _with_subdomain(conn: HTTPConnection, locale: str, config: LocaleConfig) -> str:
    host = conn.url.hostname or ""
    return str(conn.url.replace(hostname=f"{locale}.{host}"))


def build_redirect_url(conn: HTTPConnection, locale: str, config: LocaleConfig) -> str:
    """Absolute URL of the current request with ``locale`` added.

    Examples (locale "de"):
        query:     http://localhost/example?page=2 -> http://localhost/example?page=2&locale=de
        segment:   http://localhost/example        -> http://localhost/de/example
        subdomain: http://localhost/example        -> http://de.localhost/example
    """
    match config.scheme:
        case AddressingScheme.QUERY:
            return _with_query_param(conn, locale, config)
        case AddressingScheme.SEGMENT:
            return _with_segment(conn, locale, config)
        case AddressingScheme.SUBDOMAIN:
            return _with_subdomain(conn, locale, config)
    raise ValueError(f"Unsupported addressing scheme: {config.scheme}")
