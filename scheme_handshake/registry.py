import logging

from scheme_handshake.environment import HostEnvironment
from scheme_handshake.url import probe_url

_log = logging.getLogger(__name__)


class SchemeRegistry:
    """Answers "can I invoke the process behind this scheme?"

    Nothing is cached: every call queries the environment again, so a scheme
    installed or removed later is reflected on the next call.
    """

    def __init__(self, environment: HostEnvironment) -> None:
        self._environment = environment

    def is_available(self, scheme: str) -> bool:
        url = probe_url(scheme)  # raises InvalidSchemeError before any query
        available = bool(self._environment.can_resolve(url))
        _log.info("scheme available? %s = %s", scheme, available)
        return available
