# samesame/memory.py
"""
samesame.memory
---------------

Owned buffers for secret material.

- SecretBuffer(size) / SecretBuffer.alloc(size)
- SecretBuffer.from_bytes(data), SecretBuffer.from_text(text) and secret_buffer(data)
- secret_alloc(size) context manager
- close(), zero(), read(), write(), view()
- Raises SecretBufferClosed after close()

Implementation:
- Backed by a bytearray the buffer itself allocates and owns; never by an
  immutable bytes or str object.
- Pages are locked in RAM when possible (libsodium or libc mlock), best-effort.
  Locks cover whole pages and do not nest: small buffers sharing a page (such
  as the two copies compare() makes) lose the lock when the first of them is
  closed. Zeroing does not depend on the lock.
- Zeroing goes through _sodium.memzero (sodium_memzero or ctypes.memset), which
  the interpreter cannot elide.
- read() returns an immutable copy the buffer cannot scrub; prefer view().
"""

from __future__ import annotations
import typing as _typing
import logging

from . import _sodium

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Public exceptions
class SecretBufferError(Exception):
    pass


class SecretBufferClosed(SecretBufferError):
    pass


class SecretBuffer:
    """
    Fixed-size mutable buffer holding a copy of secret material.

    Public surface:
      - alloc(size) / from_bytes(data) / from_text(text)
      - write(data, offset=0)
      - read(length=None, offset=0)
      - view()
      - zero(), close()
      - context manager, or secret_alloc() for a fresh buffer
    """

    def __init__(self, size: int, lock: bool = True):
        size = int(size)
        if size < 0:
            raise ValueError("size must be non-negative")
        self.size = size
        self._closed = False
        self._buf: bytearray | None = bytearray(size)
        self._locked = False

        if lock and size:
            self._locked = _sodium.mlock(self._buf)
            if not self._locked:
                logger.debug("Could not lock %d-byte SecretBuffer in memory", size)
        logger.debug("Allocated SecretBuffer of %d bytes", size)

    def __len__(self) -> int:
        return self.size

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Basic operations ---
    def write(self, data: _typing.Union[bytes, bytearray, memoryview], offset: int = 0) -> None:
        if self._closed:
            raise SecretBufferClosed("buffer closed")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")
        with memoryview(data) as src:
            length = src.nbytes
            if offset < 0 or offset + length > self.size:
                raise ValueError("write out of bounds")
            self._buf[offset: offset + length] = src.cast("B") if src.format != "B" else src

    def read(self, length: int | None = None, offset: int = 0) -> bytes:
        """Return a copy of (part of) the buffer. The copy is not scrubbed."""
        if self._closed:
            raise SecretBufferClosed("buffer closed")
        if length is None:
            length = self.size - offset
        if offset < 0 or length < 0 or offset + length > self.size:
            raise ValueError("read out of bounds")
        return bytes(self._buf[offset: offset + length])

    def view(self) -> memoryview:
        """Read-only view over the buffer; release it before close()."""
        if self._closed:
            raise SecretBufferClosed("buffer closed")
        return memoryview(self._buf).toreadonly()

    # --- Zeroing ---
    def zero(self) -> None:
        """Overwrite the whole buffer with zeros in place."""
        if self._closed:
            return
        _sodium.memzero(self._buf)

    # --- Close / free ---
    def close(self) -> None:
        """Zero the buffer, unlock its pages and drop the storage."""
        if self._closed:
            return
        try:
            self.zero()
        finally:
            if self._locked:
                if not _sodium.munlock(self._buf):
                    logger.debug("munlock failed for %d-byte SecretBuffer", self.size)
                self._locked = False
            self._buf = None
            self._closed = True

    # Context manager
    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            logger.debug("SecretBuffer cleanup in __del__ failed", exc_info=True)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<SecretBuffer size={self.size} {state}>"

    # Convenience factories
    @classmethod
    def alloc(cls, size: int) -> "SecretBuffer":
        return cls(size)

    @classmethod
    def from_bytes(cls, data: _typing.Union[bytes, bytearray, memoryview]) -> "SecretBuffer":
        with memoryview(data) as src:
            sb = cls(src.nbytes)
            if src.nbytes:
                sb.write(src)
        return sb

    @classmethod
    def from_text(cls, text: str, encoding: str = "utf-8", errors: str = "strict") -> "SecretBuffer":
        """
        Copy `text` into a new buffer in the given encoding.

        Python has to materialise the encoded form as a temporary bytes object
        on the way in; that temporary is dropped immediately but cannot be
        scrubbed.
        """
        if not isinstance(text, str):
            raise TypeError("text must be str")
        return cls.from_bytes(text.encode(encoding, errors))


# ---- Convenience helpers ----
def secret_alloc(size: int) -> _typing.ContextManager[SecretBuffer]:
    """Context manager returning a SecretBuffer of `size` bytes."""
    return _SecretAllocCtx(size)


class _SecretAllocCtx:
    def __init__(self, size: int):
        self.size = size
        self._obj: _typing.Optional[SecretBuffer] = None

    def __enter__(self) -> SecretBuffer:
        self._obj = SecretBuffer.alloc(self.size)
        return self._obj

    def __exit__(self, exc_type, exc, tb):
        try:
            if self._obj is not None:
                self._obj.close()
        finally:
            self._obj = None


def secret_buffer(data: _typing.Union[bytes, bytearray, memoryview, str]) -> SecretBuffer:
    """Allocate a SecretBuffer and copy `data` (text is UTF-8 encoded) into it."""
    if isinstance(data, str):
        return SecretBuffer.from_text(data)
    return SecretBuffer.from_bytes(data)
