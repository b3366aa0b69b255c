"""One process's side of the handshake, wired over a shared host environment."""
import logging
from typing import Mapping

from scheme_handshake.environment import HostEnvironment, InMemoryEnvironment
from scheme_handshake.errors import HandshakeError, InvalidSchemeError
from scheme_handshake.identifiers import FIXED_TOKEN, new_session_identifier
from scheme_handshake.initiator import HandshakeInitiator, ReturnInitiator
from scheme_handshake.models import InvocationResult, InvocationTarget
from scheme_handshake.receiver import HandshakeReceiver
from scheme_handshake.registry import SchemeRegistry
from scheme_handshake.state import ProcessSessionState
from scheme_handshake.utils.patterns import validate_scheme

_log = logging.getLogger(__name__)


class Endpoint:
    """Composes registry, initiators and receiver for the process owning `scheme`.

    The launch/back helpers behave like a UI control: recoverable handshake
    errors are logged and turn into a no-op (None) with state left untouched.
    """

    def __init__(self, scheme: str, environment: HostEnvironment) -> None:
        self.scheme = validate_scheme(scheme)
        self.environment = environment
        self.state = ProcessSessionState()
        self.registry = SchemeRegistry(environment)
        self.initiator = HandshakeInitiator(environment)
        self.returner = ReturnInitiator(environment)
        self.receiver = HandshakeReceiver(self.state)

    def install(self, *, records_identifier: bool = True) -> "Endpoint":
        """Register this endpoint for its scheme (in-memory environment only).

        A pure caller passes records_identifier=False: incoming invocations then
        only resume it and its session state stays untouched.
        """
        if not isinstance(self.environment, InMemoryEnvironment):
            raise TypeError("install() needs an InMemoryEnvironment")
        handler = self.receiver.on_invoked if records_identifier else self._on_resumed
        self.environment.register(self.scheme, handler)
        return self

    def _on_resumed(self, target: InvocationTarget) -> None:
        _log.info("%s resumed by %s://", self.scheme, target.scheme)

    def uninstall(self) -> None:
        if isinstance(self.environment, InMemoryEnvironment):
            self.environment.unregister(self.scheme)

    def can_launch(self, scheme: str) -> bool:
        """Whether a launch control targeting scheme should be enabled."""
        try:
            return self.registry.is_available(scheme)
        except InvalidSchemeError as exc:
            _log.warning("launch disabled: %s", exc)
            return False

    def launch(
        self,
        scheme: str,
        *,
        fixed: bool = False,
        query: Mapping[str, str] | None = None,
    ) -> InvocationResult | None:
        identifier = FIXED_TOKEN if fixed else new_session_identifier()
        _log.debug("identifier = %s", identifier)
        try:
            return self.initiator.invoke(scheme, identifier, query)
        except HandshakeError as exc:
            _log.warning("launch of %s skipped: %s", scheme, exc)
            return None

    def back(self, caller_scheme: str) -> InvocationResult | None:
        try:
            return self.returner.return_to_caller(caller_scheme)
        except HandshakeError as exc:
            _log.warning("return to %s skipped: %s", caller_scheme, exc)
            return None
