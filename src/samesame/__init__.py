"""
SameSame: constant-time password comparison, secret scrubbing and strength grading.
"""

from .compare import compare
from .digest import HashAlgorithmUnsupported, secure_hash
from .memory import SecretBuffer, SecretBufferClosed, SecretBufferError, secret_alloc, secret_buffer
from .session import SecretScope, secret_scope
from .strength import Grade, StrengthReport, assess_strength, evaluate_strength
from .utils import constant_time_equals, scrub

__all__ = ["compare",
                "evaluate_strength",
                "assess_strength",
                "secure_hash",
                "scrub",
                "constant_time_equals",
                "SecretBuffer",
                "SecretBufferError",
                "SecretBufferClosed",
                "secret_alloc",
                "secret_buffer",
                "SecretScope",
                "secret_scope",
                "Grade",
                "StrengthReport",
                "HashAlgorithmUnsupported"
                ]

__version__ = "1.0.0"
__license__ = "MIT"
