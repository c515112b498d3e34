"""Browser locale detection from the Accept-Language header.

Only the primary language tag prefix is considered: the first two
characters of the raw header value. Quality values and the rest of the
preference list are ignored, so "es-es,es;q=0.5" detects "es" and
"xx-xx,en;q=0.9" detects nothing.
"""

from collections.abc import Collection


def detect_from_header(header: str | None, available: Collection[str]) -> str | None:
    """Match the header's two-character language prefix against ``available``.

    Args:
        header: The raw Accept-Language header value

    Returns:
        The matching locale code, or None if the header is missing, shorter
        than two characters, or its prefix is not available.
    """
    if not header or len(header) < 2:
        return None

    candidate = header[:2]
    return candidate if candidate in available else None
