"""Error taxonomy for the handshake. Every condition here is recoverable."""


class HandshakeError(Exception):
    """Base class for handshake failures that should no-op rather than crash."""


class InvalidSchemeError(HandshakeError, ValueError):
    """Scheme string is malformed; raised before any environment call."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"invalid scheme: {scheme!r}")
        self.scheme = scheme


class InvalidTargetError(HandshakeError, ValueError):
    """Target cannot be serialized into (or parsed from) an invocation URL."""


class DispatchRejected(HandshakeError):
    """The host environment declined to dispatch the invocation."""

    def __init__(self, url: str) -> None:
        super().__init__(f"dispatch rejected: {url}")
        self.url = url
