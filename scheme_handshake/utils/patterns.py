import re

from scheme_handshake.errors import InvalidSchemeError

# RFC 3986 scheme, restricted to lowercase
SCHEME_PATTERN = re.compile(r"[a-z][a-z0-9+.-]*")

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PATH_SEGMENT_PATTERN = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:@]|%[0-9A-Fa-f]{2})*")


def validate_scheme(scheme: str) -> str:
    """Return scheme unchanged, or raise InvalidSchemeError if it is malformed."""
    if not isinstance(scheme, str) or not SCHEME_PATTERN.fullmatch(scheme):
        raise InvalidSchemeError(scheme)
    return scheme


def is_valid_path_segment(segment: str) -> bool:
    return PATH_SEGMENT_PATTERN.fullmatch(segment) is not None
