"""Keep JA4 fingerprints per connection and hand them to WSGI applications."""

from __future__ import annotations

import enum
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Union

from .fingerprint import ClientHello, ja4

ENVIRON_KEY = "ja4plus.fingerprint"

RemoteAddr = Union[str, tuple]
WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


class ConnState(enum.Enum):
    """Lifecycle states of a server connection."""

    NEW = "new"
    ACTIVE = "active"
    IDLE = "idle"
    HIJACKED = "hijacked"
    CLOSED = "closed"


def _addr_key(remote_addr: RemoteAddr) -> str:
    """Render a remote address as ``host:port`` (``[host]:port`` for IPv6)."""
    if isinstance(remote_addr, str):
        return remote_addr
    if isinstance(remote_addr, (tuple, list)) and len(remote_addr) >= 2:
        host, port = remote_addr[0], remote_addr[1]
        if ":" in str(host):
            return f"[{host}]:{port}"
        return f"{host}:{port}"
    raise TypeError(f"unsupported remote address: {remote_addr!r}")


def _environ_addr(environ: Mapping[str, Any]) -> str | None:
    host = environ.get("REMOTE_ADDR")
    if not host:
        return None
    port = environ.get("REMOTE_PORT")
    if port in (None, ""):
        return host
    return _addr_key((host, port))


class Ja4Middleware:
    """Thread-safe store of JA4 fingerprints keyed by the client's address.

    Fingerprints are recorded during the TLS handshake and must be removed
    when the connection goes away, either through :meth:`on_conn_state` or
    :meth:`forget`.
    """

    def __init__(self) -> None:
        self._fingerprints: dict[str, str] = {}
        self._lock = threading.Lock()

    def record(self, remote_addr: RemoteAddr, hello: ClientHello | None) -> str:
        """Fingerprint ``hello`` and store it for ``remote_addr``."""
        if hello is None:
            raise ValueError("failed to extract client TLS hello")
        fingerprint = ja4(hello)
        with self._lock:
            self._fingerprints[_addr_key(remote_addr)] = fingerprint
        return fingerprint

    def wrap(self, app: WSGIApp) -> WSGIApp:
        """Return a WSGI app that puts the caller's fingerprint into the environ."""

        def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            addr = _environ_addr(environ)
            fingerprint = self.ja4_from_conn(addr) if addr is not None else None
            if fingerprint is not None:
                environ = {**environ, ENVIRON_KEY: fingerprint}
            return app(environ, start_response)

        return wrapped

    def on_conn_state(self, remote_addr: RemoteAddr, state: ConnState) -> None:
        """Drop the fingerprint once the connection is closed or hijacked."""
        if state in (ConnState.CLOSED, ConnState.HIJACKED):
            self.forget(remote_addr)

    def forget(self, remote_addr: RemoteAddr) -> None:
        """Remove the fingerprint stored for ``remote_addr``, if any."""
        with self._lock:
            self._fingerprints.pop(_addr_key(remote_addr), None)

    def ja4_from_conn(self, remote_addr: RemoteAddr) -> str | None:
        """Return the fingerprint stored for ``remote_addr``, or None."""
        with self._lock:
            return self._fingerprints.get(_addr_key(remote_addr))


def ja4_from_environ(environ: Mapping[str, Any]) -> str | None:
    """Return the fingerprint a wrapped app was given, or None."""
    fingerprint = environ.get(ENVIRON_KEY)
    return fingerprint if isinstance(fingerprint, str) else None