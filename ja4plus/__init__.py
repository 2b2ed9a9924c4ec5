"""JA4 TLS client fingerprinting and a per-connection store with a WSGI wrapper."""

__version__ = "0.1.0"
__all__ = ["fingerprint", "middleware"]