import logging

from scheme_handshake.models import InvocationTarget
from scheme_handshake.state import ProcessSessionState
from scheme_handshake.url import parse_query, parse_url, split_url

_log = logging.getLogger(__name__)


def _as_target(target: InvocationTarget | str) -> InvocationTarget:
    return target if isinstance(target, InvocationTarget) else parse_url(target)


def parse_query_parameters(target: InvocationTarget | str) -> dict[str, str]:
    """Return the target's query parameters as a fresh dict.

    A raw URL string is split on its query component; duplicate keys resolve to
    the last occurrence and a URL without a query yields {}.
    """
    if isinstance(target, InvocationTarget):
        return dict(target.query_parameters)
    return parse_query(split_url(target)[2])


class HandshakeReceiver:
    """Entry point run by the host environment when this process is invoked.

    Calls arrive one at a time on the process's single sequencing context, so
    the state is written without locking.
    """

    def __init__(self, state: ProcessSessionState) -> None:
        self.state = state

    def on_invoked(self, target: InvocationTarget | str) -> None:
        target = _as_target(target)
        _log.debug("invoked with %s://%s", target.scheme, target.path_segment)
        # last invocation wins, including an empty identifier
        self.state.identifier = target.path_segment
        self.state.launched = True
        self.state.invocation_count += 1

    def on_launched(self, target: InvocationTarget | str | None = None) -> None:
        """Process-start hook; a cold launch may or may not carry a target."""
        if target is None:
            _log.debug("launched without an invocation target")
            self.state.launched = True
            return
        self.on_invoked(target)
