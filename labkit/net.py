"""Signal-safe output and client/server socket helpers.

``sio_puts`` and ``sio_putl`` write straight to the standard output
descriptor without going through any buffer. ``open_clientfd`` and
``open_listenfd`` work for IPv4 and IPv6 alike. They try every address
the resolver offers until one works.
"""

from __future__ import annotations

import os
import socket
from typing import Union

from labkit.rio import writen

# Backlog passed to listen().
LISTENQ = 1024

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_AddrInfo = list[tuple]


def ltoa(value: int, base: int = 10) -> str:
    """Render ``value`` in ``base`` with lower-case digits and a leading minus sign."""
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must lie between 2 and {len(_DIGITS)}")
    digits = []
    remaining = abs(value)
    while True:
        remaining, digit = divmod(remaining, base)
        digits.append(_DIGITS[digit])
        if remaining == 0:
            break
    if value < 0:
        digits.append("-")
    return "".join(reversed(digits))


def sio_puts(text: Union[str, bytes]) -> int:
    """Write ``text`` to the standard output descriptor; return the byte count."""
    data = text.encode() if isinstance(text, str) else bytes(text)
    return writen(os.sys.stdout.fileno() if False else 1, data)


def sio_putl(value: int) -> int:
    """Write ``value`` in decimal to the standard output descriptor."""
    return sio_puts(ltoa(value, 10))


def _resolve(host: Union[str, None], port: Union[str, int], flags: int) -> _AddrInfo:
    """Look up stream addresses, preferring only configured address families.

    ``AI_ADDRCONFIG`` hides loopback addresses on hosts with no other
    network configured, so the lookup is repeated without it if it fails.
    """
    service = str(port)
    try:
        return socket.getaddrinfo(
            host, service, type=socket.SOCK_STREAM,
            flags=flags | socket.AI_ADDRCONFIG,
        )
    except socket.gaierror:
        return socket.getaddrinfo(
            host, service, type=socket.SOCK_STREAM, flags=flags
        )


def open_clientfd(hostname: str, port: Union[str, int]) -> socket.socket:
    """Connect to ``hostname`` on the numeric ``port`` and return the socket.

    Raises :class:`socket.gaierror` if the name cannot be resolved and
    :class:`OSError` if no address accepts the connection.
    """
    infos = _resolve(hostname, port, socket.AI_NUMERICSERV)
    last_error: Union[OSError, None] = None
    for family, socktype, proto, _, address in infos:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            last_error = exc
            continue
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    if last_error is not None:
        raise last_error
    raise OSError(f"no address to connect to for {hostname}:{port}")


def open_listenfd(port: Union[str, int]) -> socket.socket:
    """Return a socket listening on the numeric ``port`` on every local address.

    Raises :class:`socket.gaierror` if the port cannot be resolved and
    :class:`OSError` if no address can be bound.
    """
    infos = _resolve(None, port, socket.AI_PASSIVE | socket.AI_NUMERICSERV)
    last_error: Union[OSError, None] = None
    for family, socktype, proto, _, address in infos:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            last_error = exc
            continue
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        try:
            sock.listen(LISTENQ)
        except OSError:
            sock.close()
            raise
        return sock
    if last_error is not None:
        raise last_error
    raise OSError(f"no address to listen on for port {port}")