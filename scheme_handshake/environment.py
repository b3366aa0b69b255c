"""Swappable host environments: the OS-level resolve/dispatch primitives.

Toggle via HANDSHAKE_ENVIRONMENT env var:
  HANDSHAKE_ENVIRONMENT=memory   (default, in-process fake dispatcher)
  HANDSHAKE_ENVIRONMENT=xdg      (desktop x-scheme-handler via xdg-utils)
"""

from __future__ import annotations

import logging
import os
from collections import deque
from typing import Callable, Protocol, runtime_checkable

from scheme_handshake.errors import HandshakeError
from scheme_handshake.models import InvocationTarget
from scheme_handshake.url import parse_url, split_url
from scheme_handshake.utils.xdg import open_url, query_scheme_handler

_log = logging.getLogger(__name__)

InvocationHandler = Callable[[InvocationTarget], None]


# ── Protocol ─────────────────────────────────────────────────────────────────

@runtime_checkable
class HostEnvironment(Protocol):
    """The two primitives the handshake needs from the surrounding platform."""

    def can_resolve(self, url: str) -> bool:
        """Return True if some process is registered to handle url."""
        ...

    def dispatch(self, url: str) -> bool:
        """Ask the platform to deliver url. True means accepted, nothing more.

        There is no completion or failure callback, and an accepted dispatch
        cannot be retracted.
        """
        ...


# ── InMemoryEnvironment ──────────────────────────────────────────────────────

class InMemoryEnvironment:
    """Fake dispatcher: schemes map to in-process handlers.

    Accepted invocations are queued and only reach their handler when
    deliver_pending() runs, one at a time, on the caller's thread.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, InvocationHandler] = {}
        self._pending: deque[InvocationTarget] = deque()
        self._delivering = False
        self.history: list[str] = []
        self.queries: list[str] = []

    def register(self, scheme: str, handler: InvocationHandler) -> None:
        self._handlers[scheme] = handler

    def unregister(self, scheme: str) -> None:
        self._handlers.pop(scheme, None)

    def _scheme_of(self, url: str) -> str | None:
        try:
            return split_url(url)[0]
        except HandshakeError:
            return None

    def can_resolve(self, url: str) -> bool:
        self.queries.append(url)
        return self._scheme_of(url) in self._handlers

    def dispatch(self, url: str) -> bool:
        if self._scheme_of(url) not in self._handlers:
            return False
        try:
            target = parse_url(url)
        except HandshakeError as exc:
            _log.warning("refusing to dispatch %s: %s", url, exc)
            return False
        self._pending.append(target)
        self.history.append(url)
        return True

    @property
    def pending(self) -> int:
        return len(self._pending)

    def deliver_pending(self) -> int:
        """Deliver queued invocations in FIFO order; returns how many were delivered.

        Re-entrant calls from inside a handler are no-ops; anything the handler
        dispatches is picked up by the outer loop.
        """
        if self._delivering:
            return 0
        delivered = 0
        self._delivering = True
        try:
            while self._pending:
                target = self._pending.popleft()
                handler = self._handlers.get(target.scheme)
                if handler is None:
                    # uninstalled between dispatch and delivery
                    _log.warning("dropping invocation for unregistered scheme %s", target.scheme)
                    continue
                handler(target)
                delivered += 1
        finally:
            self._delivering = False
        return delivered


# ── XdgEnvironment ───────────────────────────────────────────────────────────

class XdgEnvironment:
    """Desktop backend: resolves x-scheme-handler/<scheme> and launches via xdg-open."""

    def __init__(self, *, timeout: float = 5) -> None:
        self._timeout = timeout

    def can_resolve(self, url: str) -> bool:
        try:
            scheme = split_url(url)[0]
        except HandshakeError:
            return False
        try:
            handler = query_scheme_handler(scheme, timeout=self._timeout)
        except OSError as exc:
            _log.warning("xdg scheme lookup failed (scheme=%s): %s", scheme, exc)
            return False
        _log.debug("x-scheme-handler/%s -> %s", scheme, handler)
        return handler is not None

    def dispatch(self, url: str) -> bool:
        if not self.can_resolve(url):
            return False
        try:
            open_url(url, timeout=self._timeout)
        except OSError as exc:
            _log.warning("xdg-open failed (url=%s): %s", url, exc)
            return False
        return True


# ── Factory ───────────────────────────────────────────────────────────────────

def make_environment(name: str | None = None, *, timeout: float = 5) -> HostEnvironment:
    """Return the host environment named by name or HANDSHAKE_ENVIRONMENT.

    Raises ValueError for an unknown environment name.
    """
    backend = (name or os.getenv("HANDSHAKE_ENVIRONMENT", "memory")).lower()

    if backend == "memory":
        return InMemoryEnvironment()
    if backend == "xdg":
        return XdgEnvironment(timeout=timeout)

    raise ValueError(f"Unknown HANDSHAKE_ENVIRONMENT={backend!r}. Use 'memory' or 'xdg'.")
