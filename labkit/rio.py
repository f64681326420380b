"""Robust I/O on file descriptors.

``readn`` and ``writen`` move a whole byte count without a buffer, carrying
on after short transfers and interrupted calls. :class:`RioReader` adds a
per-descriptor buffer so that whole-count reads and text lines can be mixed
freely on the same descriptor.
"""

from __future__ import annotations

import os
from typing import Iterator

# Size of the internal buffer of a RioReader.
RIO_BUFSIZE = 8192

# Maximum text line length.
MAXLINE = 8192

# Maximum I/O buffer size.
MAXBUF = 8192


def _read_once(fd: int, size: int) -> bytes:
    """One ``read`` that is retried when a signal interrupts it."""
    while True:
        try:
            return os.read(fd, size)
        except InterruptedError:
            continue


def readn(fd: int, n: int) -> bytes:
    """Read up to ``n`` bytes from ``fd``; fewer only if end of file comes first."""
    if n < 0:
        raise ValueError("n must not be negative")
    chunks: list[bytes] = []
    left = n
    while left > 0:
        chunk = _read_once(fd, left)
        if not chunk:
            break
        chunks.append(chunk)
        left -= len(chunk)
    return b"".join(chunks)


def writen(fd: int, data: bytes) -> int:
    """Write all of ``data`` to ``fd`` and return the number of bytes written."""
    view = memoryview(data)
    while view:
        try:
            written = os.write(fd, view)
        except InterruptedError:
            continue
        if written <= 0:
            raise OSError(f"write to descriptor {fd} made no progress")
        view = view[written:]
    return len(data)


class RioReader:
    """A buffered reader bound to one file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._buf = b""
        self._pos = 0

    @property
    def buffered(self) -> int:
        """Number of unread bytes held in the internal buffer."""
        return len(self._buf) - self._pos

    def _fill(self) -> bool:
        """Refill an empty buffer; return False at end of file."""
        if self.buffered > 0:
            return True
        self._buf = _read_once(self.fd, RIO_BUFSIZE)
        self._pos = 0
        return bool(self._buf)

    def _take(self, n: int) -> bytes:
        """Hand out up to ``n`` bytes from the buffer, refilling it if empty."""
        if not self._fill():
            return b""
        end = min(self._pos + n, len(self._buf))
        chunk = self._buf[self._pos:end]
        self._pos = end
        return chunk

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes; fewer only if end of file comes first."""
        if n < 0:
            raise ValueError("n must not be negative")
        chunks: list[bytes] = []
        left = n
        while left > 0:
            chunk = self._take(left)
            if not chunk:
                break
            chunks.append(chunk)
            left -= len(chunk)
        return b"".join(chunks)

    def readline(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line, newline included, of at most ``maxlen - 1`` bytes.

        Returns ``b""`` at end of file. A line longer than the limit is
        returned in pieces by successive calls.
        """
        if maxlen < 1:
            raise ValueError("maxlen must be at least 1")
        limit = maxlen - 1
        chunks: list[bytes] = []
        got = 0
        while got < limit:
            if not self._fill():
                break
            end = min(len(self._buf), self._pos + (limit - got))
            newline = self._buf.find(b"\n", self._pos, end)
            if newline >= 0:
                end = newline + 1
            chunk = self._buf[self._pos:end]
            self._pos = end
            chunks.append(chunk)
            got += len(chunk)
            if newline >= 0:
                break
        return b"".join(chunks)

    def __iter__(self) -> Iterator[bytes]:
        """Yield lines until end of file."""
        while True:
            line = self.readline()
            if not line:
                return
            yield line