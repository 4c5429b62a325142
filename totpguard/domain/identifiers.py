import re

# Public uuids and API keys are 48 random letters and digits.
KEY_LENGTH = 48
_KEY_RE = re.compile(rf"[A-Za-z0-9]{{{KEY_LENGTH}}}")


def is_key(key: str | None) -> bool:
    """
    Structural check only; says nothing about whether the key maps to a user.
    """
    if not key:
        return False
    return _KEY_RE.fullmatch(key) is not None


def sanitize_key(key: str | None) -> str:
    """Return the key unchanged if well formed, otherwise an empty string."""
    return key if is_key(key) else ""
