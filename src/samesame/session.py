"""
samesame.session
----------------

Scoped ownership of secret copies:
- Every SecretBuffer created through a scope is tracked
- All of them are zeroed and closed when the scope exits
- Cleanup runs on normal return and on error/exception alike
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union
import logging

from .memory import SecretBuffer

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class SecretScope:
    """
    Context manager owning the SecretBuffers of one operation.
    """

    def __init__(self):
        self._secrets: list[SecretBuffer] = []

    def copy(self, data: Union[str, bytes, bytearray, memoryview]) -> SecretBuffer:
        """
        Copy `data` into a new tracked SecretBuffer. Text is UTF-8 encoded;
        lone surrogates are kept as their raw code units rather than rejected.
        """
        if isinstance(data, str):
            sec = SecretBuffer.from_text(data, errors="surrogatepass")
        else:
            sec = SecretBuffer.from_bytes(data)
        self._secrets.append(sec)
        return sec

    def alloc(self, size: int) -> SecretBuffer:
        """Allocate an empty tracked SecretBuffer."""
        sec = SecretBuffer(size)
        self._secrets.append(sec)
        return sec

    def __len__(self) -> int:
        return len(self._secrets)

    def close(self) -> None:
        for sec in self._secrets:
            try:
                sec.close()
            except Exception as e:
                logger.warning("Failed to close SecretBuffer: %s", e)
        logger.debug("Closed %d SecretBuffer(s)", len(self._secrets))
        self._secrets.clear()

    def __enter__(self) -> SecretScope:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


@contextmanager
def secret_scope() -> Iterator[SecretScope]:
    """
    Context manager for a secret scope.

    Usage:
        with secret_scope() as scope:
            left = scope.copy(b"first")
            right = scope.copy("second")
    """
    scope = SecretScope()
    try:
        yield scope
    finally:
        scope.close()
