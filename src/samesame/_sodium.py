"""
samesame._sodium
----------------

Shim over the few libsodium routines the secret-handling code needs.

- Provides: have_libsodium, buffer_address, memzero, mlock, munlock
- All routines take a writable Python buffer (bytearray or writable memoryview),
  resolve its address through ctypes and act on it in place.
- If libsodium is unavailable, zeroing falls back to ctypes.memset and page
  locking to POSIX mlock / Windows VirtualLock.

Notes:
- Zeroing always goes through a foreign call, so the interpreter cannot drop it
  as a dead store.
- Page locking is best-effort; failure is logged, never raised.
"""

from __future__ import annotations
import ctypes
import ctypes.util
import os
import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

c_void_p = ctypes.c_void_p
c_size_t = ctypes.c_size_t

WritableBuffer = Union[bytearray, memoryview]


def _try_load_libsodium() -> Optional[ctypes.CDLL]:
    for name in ("sodium", "libsodium"):
        libname = ctypes.util.find_library(name)
        if libname:
            try:
                return ctypes.CDLL(libname)
            except OSError:
                logger.debug("Found %s but could not load it", libname)
    return None


def _try_load_libc() -> Optional[ctypes.CDLL]:
    if os.name == "posix":
        for candidate in ("c", "libc.so.6", "libc.dylib"):
            try:
                return ctypes.CDLL(ctypes.util.find_library(candidate) or candidate)
            except OSError:
                continue
    return None


_libsodium = _try_load_libsodium()
_have_sodium = False
if _libsodium is not None:
    try:
        _libsodium.sodium_init.restype = ctypes.c_int
        # 0 = initialised now, 1 = already initialised, -1 = failure
        _have_sodium = _libsodium.sodium_init() >= 0
        if _have_sodium:
            _libsodium.sodium_memzero.argtypes = (c_void_p, c_size_t)
            _libsodium.sodium_memzero.restype = None
            _libsodium.sodium_mlock.argtypes = (c_void_p, c_size_t)
            _libsodium.sodium_mlock.restype = ctypes.c_int
            _libsodium.sodium_munlock.argtypes = (c_void_p, c_size_t)
            _libsodium.sodium_munlock.restype = ctypes.c_int
    except AttributeError:
        logger.debug("libsodium is missing expected symbols; using fallbacks")
        _have_sodium = False

_libc = None
_have_mlock = False
if not _have_sodium and os.name == "posix":
    _libc = _try_load_libc()
    if _libc is not None:
        try:
            _libc.mlock.argtypes = (c_void_p, c_size_t)
            _libc.mlock.restype = ctypes.c_int
            _libc.munlock.argtypes = (c_void_p, c_size_t)
            _libc.munlock.restype = ctypes.c_int
            _have_mlock = True
        except AttributeError:
            _have_mlock = False


# --- Public API -----------------------------------------------------------
def have_libsodium() -> bool:
    return _have_sodium


def buffer_address(buf: WritableBuffer) -> ctypes.Array:
    """
    Return a ctypes char array sharing memory with `buf`.

    The array holds an export on `buf` until it is garbage collected, so
    callers keep it only for the duration of a single foreign call.
    """
    return (ctypes.c_char * len(buf)).from_buffer(buf)


def memzero(buf: WritableBuffer) -> None:
    """Overwrite every byte of `buf` with zero, in place."""
    size = len(buf)
    if size == 0:
        return
    arr = buffer_address(buf)
    try:
        if _have_sodium:
            _libsodium.sodium_memzero(ctypes.addressof(arr), size)
        else:
            ctypes.memset(ctypes.addressof(arr), 0, size)
    finally:
        del arr


def mlock(buf: WritableBuffer) -> bool:
    """Ask the OS to keep the pages of `buf` out of swap. Returns success."""
    size = len(buf)
    if size == 0:
        return False
    arr = buffer_address(buf)
    try:
        addr = ctypes.addressof(arr)
        if _have_sodium:
            return _libsodium.sodium_mlock(addr, size) == 0
        if os.name == "nt":
            try:
                return bool(ctypes.windll.kernel32.VirtualLock(c_void_p(addr), c_size_t(size)))
            except (AttributeError, OSError) as e:
                logger.debug("VirtualLock failed: %s", e)
                return False
        if _have_mlock:
            return _libc.mlock(addr, size) == 0
        return False
    finally:
        del arr


def munlock(buf: WritableBuffer) -> bool:
    """Release a lock taken by mlock(). Returns success."""
    size = len(buf)
    if size == 0:
        return False
    arr = buffer_address(buf)
    try:
        addr = ctypes.addressof(arr)
        if _have_sodium:
            # sodium_munlock also zeroes the region before unlocking
            return _libsodium.sodium_munlock(addr, size) == 0
        if os.name == "nt":
            try:
                return bool(ctypes.windll.kernel32.VirtualUnlock(c_void_p(addr), c_size_t(size)))
            except (AttributeError, OSError) as e:
                logger.debug("VirtualUnlock failed: %s", e)
                return False
        if _have_mlock:
            return _libc.munlock(addr, size) == 0
        return False
    finally:
        del arr


__all__ = [
    "have_libsodium",
    "buffer_address",
    "memzero",
    "mlock",
    "munlock",
]
