# totpguard/domain/totp.py
from __future__ import annotations

import base64
import hmac

import pyotp


def compute_counter(time: int | float, epoch: int, step_seconds: int) -> int:
    """Number of whole steps elapsed between epoch and time."""
    if step_seconds <= 0:
        raise ValueError("step_seconds must be positive")
    return int((time - epoch) // step_seconds)


def _hotp(secret: str, digits: int) -> pyotp.HOTP:
    # The phrase itself is the HMAC key; pyotp wants it base32 encoded.
    key_b32 = base64.b32encode(secret.encode("utf-8")).decode("ascii")
    return pyotp.HOTP(key_b32, digits=digits)


def compute_code(secret: str, counter: int, *, digits: int = 6) -> str:
    """Zero-padded HOTP code (RFC 4226, HMAC-SHA1) for the counter."""
    return _hotp(secret, digits).at(counter)


def normalize_code(code: int | str, *, digits: int = 6) -> str | None:
    """
    Render a client supplied code as a zero-padded string of `digits` digits.
    Returns None when it cannot possibly be a valid code.
    """
    text = str(code).strip()
    if not (text.isascii() and text.isdigit()) or len(text) > digits:
        return None
    return text.zfill(digits)


def verify(
    secret: str,
    code: int | str,
    time: int | float,
    epoch: int,
    step_seconds: int,
    *,
    digits: int = 6,
    window: int = 0,
) -> bool:
    """
    True if `code` matches the code for the counter at `time`, or for any
    counter within `window` steps either side of it.
    """
    if window < 0:
        raise ValueError("window must be non-negative")
    if not secret:
        return False
    candidate = normalize_code(code, digits=digits)
    if candidate is None:
        return False

    hotp = _hotp(secret, digits)
    counter = compute_counter(time, epoch, step_seconds)
    matched = False
    for offset in range(-window, window + 1):
        if counter + offset < 0:
            continue
        # no early exit, every counter in the window is compared
        matched |= hmac.compare_digest(hotp.at(counter + offset), candidate)
    return matched
