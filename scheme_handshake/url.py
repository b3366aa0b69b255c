"""Invocation URL codec.

Wire shapes:
  <scheme>://                      bare capability probe / payload-free return
  <scheme>:///<segment>            data-carrying invocation
  <scheme>://<token>               fixed literal form, decodes to the same segment
  ...?k=v&k2=v2                    optional query component
"""
import re
import urllib.parse
from typing import Mapping

from scheme_handshake.errors import InvalidTargetError
from scheme_handshake.models import InvocationTarget
from scheme_handshake.utils.patterns import is_valid_path_segment, validate_scheme

_URL_PATTERN = re.compile(r"^([^:/?#\s]+)://(.*)$", re.DOTALL)


def build_target(
    scheme: str,
    identifier: str | None = None,
    query: Mapping[str, str] | None = None,
) -> InvocationTarget:
    validate_scheme(scheme)
    return InvocationTarget(
        scheme=scheme,
        path_segment=identifier or "",
        query_parameters=dict(query or {}),
    )


def probe_url(scheme: str) -> str:
    return f"{validate_scheme(scheme)}://"


def to_url(target: InvocationTarget) -> str:
    """Serialize a target; raises InvalidTargetError if the segment would break the URL."""
    segment = target.path_segment
    if not is_valid_path_segment(segment):
        raise InvalidTargetError(f"path segment cannot be carried in a URL: {segment!r}")

    url = f"{target.scheme}:///{segment}" if segment else f"{target.scheme}://"
    if target.query_parameters:
        url += "?" + urllib.parse.urlencode(target.query_parameters, quote_via=urllib.parse.quote)
    return url


def parse_query(query: str) -> dict[str, str]:
    """Split a query component into a mapping. Duplicate keys: last one wins."""
    if not query:
        return {}
    return dict(urllib.parse.parse_qsl(query, keep_blank_values=True))


def split_url(url: str) -> tuple[str, str, str]:
    """Return (scheme, path_segment, query) from a raw invocation URL."""
    match = _URL_PATTERN.match(url.strip())
    if not match:
        raise InvalidTargetError(f"not an invocation URL: {url!r}")
    scheme, rest = match.group(1).lower(), match.group(2)
    rest = rest.split("#", 1)[0]
    path, _, query = rest.partition("?")
    return scheme, path.lstrip("/"), query


def parse_url(url: str) -> InvocationTarget:
    scheme, segment, query = split_url(url)
    validate_scheme(scheme)
    return InvocationTarget(
        scheme=scheme,
        path_segment=segment,
        query_parameters=parse_query(query),
    )
