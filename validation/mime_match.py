from typing import Iterable, Optional


def match_mime_type(actual: Optional[str], allowed: Iterable[str]) -> bool:
    """Check a sniffed MIME type against an allow-list.

    A pattern accepts when it equals ``actual`` exactly, or when it has the
    form ``discrete/*`` and ``discrete`` is the part of ``actual`` before
    its first "/". A missing type never matches.

    Args:
        actual: Sniffed MIME type, e.g. "image/png". None if unknown.
        allowed: Exact types and/or ``discrete/*`` wildcards.

    Returns:
        True if any pattern accepts.
    """
    if not actual:
        return False

    discrete_actual = actual.split("/", 1)[0] if "/" in actual else None

    for pattern in allowed:
        if pattern == actual:
            return True

        discrete, sep, _ = pattern.partition("/*")
        if sep and discrete and discrete == discrete_actual:
            return True

    return False
