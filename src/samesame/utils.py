"""
samesame.utils

Low-level primitives for secret material: constant-time equality and scrubbing.
"""

from __future__ import annotations

from typing import Union

from . import _sodium

BytesLike = Union[bytes, bytearray, memoryview]


def _as_byte_view(value: BytesLike, name: str) -> memoryview:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")
    view = memoryview(value)
    if view.format != "B" or view.ndim != 1:
        try:
            return view.cast("B")
        except TypeError:
            view.release()
            raise
    return view


def constant_time_equals(a: BytesLike, b: BytesLike) -> bool:
    """
    Constant-time comparison of two byte sequences.
    Returns True if equal, False otherwise.

    The loop always runs over the longer of the two inputs and folds every
    XOR into one accumulator, so running time depends on that length only and
    never on where (or whether) the inputs differ. When the lengths differ the
    longer input is scanned against itself and the length mismatch is kept in
    a sticky flag. The accumulator is tested once, after the loop.
    """
    left = _as_byte_view(a, "a")
    try:
        right = _as_byte_view(b, "b")
    except TypeError:
        left.release()
        raise
    try:
        len_left = len(left)
        len_right = len(right)
        diff = len_left ^ len_right

        longer = left if len_left >= len_right else right
        other = right if len_left == len_right else longer

        result = 0
        for x, y in zip(longer, other):
            result |= x ^ y
        return (diff | result) == 0
    finally:
        left.release()
        right.release()


def scrub(buf) -> None:
    """
    Overwrite a mutable buffer with zeros along its full length, in place.
    Works for bytearray, writable memoryview, or anything exposing `zero()`
    (such as SecretBuffer). Idempotent; empty buffers are a no-op.
    """
    zero = getattr(buf, "zero", None)
    if callable(zero) and not isinstance(buf, (bytearray, memoryview)):
        zero()
        return
    if isinstance(buf, bytearray):
        _sodium.memzero(buf)
        return
    if isinstance(buf, memoryview):
        if buf.readonly:
            raise TypeError("cannot scrub a read-only memoryview")
        if buf.c_contiguous:
            with buf.cast("B") as flat:
                _sodium.memzero(flat)
            return
        if buf.ndim != 1:
            raise TypeError("cannot scrub a non-contiguous multi-dimensional view")
        # strided views cannot be handed to C; write element by element
        for index in range(len(buf)):
            buf[index] = 0
        return
    raise TypeError("buf must be bytearray, memoryview or SecretBuffer")
