# ja4plus

Compute JA4 TLS client fingerprints from the fields of a TLS ClientHello, and
pass them on to WSGI applications.

## Installation

```
pip install ja4plus
```

No third-party dependencies are needed.

## Fingerprinting a ClientHello

Fill a `ja4plus.fingerprint.ClientHello` with what the client offered and call
`ja4`:

```python
from ja4plus.fingerprint import ClientHello, ja4

hello = ClientHello(
    supported_versions=[0x0304],          # TLS 1.3
    cipher_suites=[0x1301, 0x1302],
    supported_protos=["http/1.1"],
)
print(ja4(hello))  # t13i0200h1_62ed6f6ca7ad_000000000000
```

`ClientHello` has these fields, all optional: `cipher_suites`, `extensions`,
`supported_versions`, `supported_protos`, `signature_schemes`,
`supported_curves`, `server_name` and `network`. `network` names the transport
(`"tcp"`, `"udp"`, `"sctp"`, `"quic"`); `None` is treated as TCP.

The fingerprint has three parts separated by underscores:

1. The transport (`t` for TCP or anything unknown, `d` for UDP/SCTP, `q` for
   QUIC); the highest offered version (`10`, `11`, `12`, `13` for TLS,
   `s3`/`s2` for SSL, `d1`, `d2`, `d3` for DTLS, `00` if none or unknown);
   `d` if a server name was sent, `i` if not; the counts of cipher suites and
   extensions with GREASE values left out, capped at 99; and the first and last
   character of the first ALPN protocol (`00` if there is none).
2. The first 12 hex digits of the SHA-256 of the sorted cipher suites, or
   twelve zeros if there are none.
3. The first 12 hex digits of the SHA-256 of the sorted extensions (without
   GREASE, SNI and ALPN), followed by the signature schemes in their original
   order; twelve zeros if no extension remains.

`ja4` raises `ValueError` if the first ALPN protocol is an empty string.

The building blocks are available too: `grease_filter(value)` tells whether a
value is a GREASE value, and `cipher_suite_hash(cipher_suites)` and
`extension_hash(extensions, signature_schemes)` return the six raw bytes of the
truncated digest. `cipher_suite_hash` expects its input to be free of GREASE
values already.

## Using the middleware

`ja4plus.middleware.Ja4Middleware` is a thread-safe store of fingerprints,
keyed by the peer address, from the moment the handshake is seen until the
connection goes away. Addresses may be given as `"host:port"` strings or as
`(host, port)` tuples; IPv6 hosts are rendered as `[host]:port`.

```python
from ja4plus.middleware import ConnState, Ja4Middleware, ja4_from_environ

middleware = Ja4Middleware()

def app(environ, start_response):
    fingerprint = ja4_from_environ(environ)
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [(fingerprint or "missing hash").encode()]

wsgi_app = middleware.wrap(app)

# From the TLS layer, once the ClientHello has been read:
middleware.record("203.0.113.7:51234", hello)

# When the server sees the connection close:
middleware.on_conn_state("203.0.113.7:51234", ConnState.CLOSED)
```

- `record(remote_addr, hello)` fingerprints the hello, stores it and returns
  it; it raises `ValueError` if `hello` is `None`.
- `wrap(app)` returns a WSGI application that looks up the fingerprint for
  `REMOTE_ADDR`/`REMOTE_PORT` and, if one is stored, passes it to `app` under
  the environ key `ja4plus.fingerprint` (`ENVIRON_KEY`).
- `ja4_from_environ(environ)` reads that key back, or returns `None`.
- `on_conn_state(remote_addr, state)` drops the fingerprint when `state` is
  `ConnState.CLOSED` or `ConnState.HIJACKED`; other states leave it in place.
- `ja4_from_conn(remote_addr)` returns the stored fingerprint or `None`, and
  `forget(remote_addr)` removes it.

## What this package does not do

It does not parse raw ClientHello bytes, run a TLS server or listener, or hook
into a TLS library's handshake. The caller must fill in `ClientHello` from its
own TLS layer, call `record` during the handshake, and report connection state
changes through `on_conn_state` or `forget` so stored fingerprints do not pile
up.