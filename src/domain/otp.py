"""
OTP generation - Six-digit numeric verification codes.

Codes come from the ``random`` module rather than ``secrets``: they are
low-value, short-lived and single-use, so a CSPRNG is not required here.
"""

import random

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp() -> str:
    """Return a uniformly distributed code in 100000-999999 as a string."""
    return str(random.randint(OTP_MIN, OTP_MAX))
