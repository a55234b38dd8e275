"""
samesame.digest
---------------

SHA-256 hex digest helper.

Notes:
- secure_hash() is a convenience for hosts that want a stable fingerprint of a
  value. It is not used by compare() and is not a password hash: there is no
  salt and no work factor.
- Text is hashed as its UTF-8 encoding, lone surrogates passed through as in
  compare(); bytes-like input is hashed as is.
"""

from __future__ import annotations

import logging
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class HashAlgorithmUnsupported(Exception):
    """Raised when the crypto backend cannot provide SHA-256."""


def secure_hash(data: Union[str, bytes, bytearray, memoryview]) -> str:
    """
    Return the lowercase 64-character hex SHA-256 of `data`.

    Raises:
        TypeError: if data is neither text nor bytes-like
        HashAlgorithmUnsupported: if the backend has no SHA-256
    """
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    elif not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be str or bytes-like")

    try:
        digest = hashes.Hash(hashes.SHA256())
    except UnsupportedAlgorithm as e:
        logger.error("SHA-256 unavailable from crypto backend: %s", e)
        raise HashAlgorithmUnsupported("hash algorithm unsupported: SHA-256") from e
    digest.update(bytes(data) if isinstance(data, memoryview) else data)
    return digest.finalize().hex()
