import logging
from typing import Mapping

from scheme_handshake.environment import HostEnvironment
from scheme_handshake.models import InvocationResult, InvocationTarget
from scheme_handshake.url import build_target, to_url

_log = logging.getLogger(__name__)


def _dispatch(environment: HostEnvironment, target: InvocationTarget) -> InvocationResult:
    url = to_url(target)  # InvalidTargetError here means nothing was dispatched
    dispatched = bool(environment.dispatch(url))
    if dispatched:
        _log.info("dispatched %s", url)
    else:
        _log.warning("dispatch rejected: %s", url)
    return InvocationResult(dispatched=dispatched, url=url)


class HandshakeInitiator:
    """Launches another process through its scheme, optionally carrying an identifier."""

    def __init__(self, environment: HostEnvironment) -> None:
        self._environment = environment

    def invoke(
        self,
        scheme: str,
        identifier: str | None = None,
        query: Mapping[str, str] | None = None,
    ) -> InvocationResult:
        """Build the invocation target and dispatch it once, fire and forget.

        Raises InvalidSchemeError or InvalidTargetError before dispatch when the
        target cannot be expressed as an invocation URL. A declined dispatch is
        reported through InvocationResult.dispatched, not raised.
        """
        target = build_target(scheme, identifier, query)
        return _dispatch(self._environment, target)


class ReturnInitiator:
    """Resumes the calling process with a payload-free invocation."""

    def __init__(self, environment: HostEnvironment) -> None:
        self._environment = environment

    def return_to_caller(self, caller_scheme: str) -> InvocationResult:
        return _dispatch(self._environment, build_target(caller_scheme))
