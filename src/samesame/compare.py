"""
samesame.compare
----------------

Password equality with disciplined handling of the secret copies.

compare(a, b) copies both candidates into scope-owned SecretBuffers, runs the
constant-time primitive over them and zeroes both copies before returning,
whichever way the call exits.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .session import secret_scope
from .utils import constant_time_equals

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Candidate = Union[str, bytes, bytearray, memoryview]


def compare(a: Optional[Candidate], b: Optional[Candidate]) -> bool:
    """
    Return True if `a` and `b` hold the same bytes, False otherwise.

    - Either side None -> False; nothing is copied.
    - Text is compared by its UTF-8 encoding, so str and bytes may be mixed.
    - Empty vs empty -> True.
    - Unequal lengths -> False, after scanning the longer length.

    Inputs are only read. TypeError for anything that is neither text nor
    bytes-like.
    """
    if a is None or b is None:
        logger.debug("compare called with an absent input")
        return False

    with secret_scope() as scope:
        left = scope.copy(a)
        right = scope.copy(b)
        left_view = left.view()
        right_view = right.view()
        try:
            return constant_time_equals(left_view, right_view)
        finally:
            left_view.release()
            right_view.release()
