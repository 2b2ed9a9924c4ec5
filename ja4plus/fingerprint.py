"""JA4 TLS client fingerprinting."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

_ZERO_HASH = bytes(6)

_SNI_EXTENSION = 0x0000
_ALPN_EXTENSION = 0x0010

_VERSION_CODES = {
    0x0301: "10",  # TLS 1.0
    0x0302: "11",  # TLS 1.1
    0x0303: "12",  # TLS 1.2
    0x0304: "13",  # TLS 1.3
    0x0300: "s3",  # SSL 3.0, deprecated but still seen in the wild
    0x0002: "s2",  # SSL 2.0, still seen in the wild
    0xFEFF: "d1",  # DTLS 1.0
    0xFEFD: "d2",  # DTLS 1.2
    0xFEFC: "d3",  # DTLS 1.3
}

_PROTOCOL_CODES = {
    "udp": "d",
    "sctp": "d",
    "quic": "q",
}


@dataclass
class ClientHello:
    """The parts of a TLS ClientHello that a JA4 fingerprint is built from.

    ``network`` names the transport the hello arrived on ("tcp", "udp",
    "sctp", "quic"); ``None`` means it is unknown and is treated as TCP.
    """

    cipher_suites: Sequence[int] = field(default_factory=list)
    extensions: Sequence[int] = field(default_factory=list)
    supported_versions: Sequence[int] = field(default_factory=list)
    supported_protos: Sequence[str] = field(default_factory=list)
    signature_schemes: Sequence[int] = field(default_factory=list)
    supported_curves: Sequence[int] = field(default_factory=list)
    server_name: str = ""
    network: str | None = None


def grease_filter(value: int) -> bool:
    """Return True if ``value`` is a GREASE value (RFC 8701)."""
    return value & 0x000F == 0x000A and value >> 8 == value & 0x00FF


def _without_grease(values: Iterable[int]) -> list[int]:
    return [value for value in values if not grease_filter(value)]


def _hash6(text: str) -> bytes:
    return hashlib.sha256(text.encode("ascii")).digest()[:6]


def _join_hex(values: Iterable[int]) -> str:
    return ",".join(f"{value:04x}" for value in values)


def cipher_suite_hash(cipher_suites: Iterable[int]) -> bytes:
    """Return the truncated SHA-256 of the sorted cipher suites.

    The input must already be free of GREASE values. The result is six raw
    bytes, all zero when there are no cipher suites.
    """
    suites = sorted(cipher_suites)
    if not suites:
        return _ZERO_HASH
    return _hash6(_join_hex(suites))


def extension_hash(extensions: Iterable[int], signature_schemes: Sequence[int]) -> bytes:
    """Return the truncated SHA-256 of sorted extensions and signature schemes.

    GREASE, SNI and ALPN extensions are left out of the hash; signature
    schemes keep their original order. The result is six raw bytes, all zero
    when no extension remains.
    """
    kept = [
        ext
        for ext in sorted(extensions)
        if not (grease_filter(ext) or ext in (_SNI_EXTENSION, _ALPN_EXTENSION))
    ]
    if not kept:
        return _ZERO_HASH

    rendered = _join_hex(kept)
    if signature_schemes:
        rendered += "_" + _join_hex(_without_grease(signature_schemes))
    return _hash6(rendered)


def _protocol_code(network: str | None) -> str:
    if network is None:
        return "t"
    return _PROTOCOL_CODES.get(network, "t")


def _version_code(versions: Sequence[int]) -> str:
    if not versions:
        return "00"
    return _VERSION_CODES.get(max(versions), "00")


def _alpn_code(protos: Sequence[str]) -> str:
    if not protos:
        return "00"
    first = protos[0]
    if not first:
        raise ValueError("first ALPN protocol is empty")
    return first[0] + first[-1]


def ja4(hello: ClientHello) -> str:
    """Return the JA4 fingerprint of ``hello``."""
    cipher_suites = _without_grease(hello.cipher_suites)
    extensions = _without_grease(hello.extensions)

    prefix = "".join(
        (
            _protocol_code(hello.network),
            _version_code(hello.supported_versions),
            "d" if hello.server_name else "i",
            f"{min(len(cipher_suites), 99):02d}",
            f"{min(len(extensions), 99):02d}",
            _alpn_code(hello.supported_protos),
        )
    )
    ciphers = cipher_suite_hash(cipher_suites).hex()
    exts = extension_hash(hello.extensions, hello.signature_schemes).hex()
    return f"{prefix}_{ciphers}_{exts}"