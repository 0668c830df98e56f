"""Referral code generation."""

import os
import secrets
import string

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_CODE_LENGTH = 8


def default_code_length() -> int:
    return int(os.getenv("REFERRAL_CODE_LENGTH", DEFAULT_CODE_LENGTH))


def generate_referral_code(length: int | None = None) -> str:
    """Draw a fixed-length code uniformly from ``A-Z0-9``.

    No uniqueness check happens here; callers that need unique codes must
    check against stored accounts and regenerate on collision.
    """
    length = default_code_length() if length is None else length
    if length < 1:
        raise ValueError(f"Referral code length must be positive, got {length}")
    return "".join(secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(length))
