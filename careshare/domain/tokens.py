"""
Token Generator

Human-shareable, unguessable tokens for each use case. Every position is
drawn independently from the full alphabet with `secrets`, so entropy is
len(alphabet) ** length. Functions have no side effects; uniqueness is the
caller's job (see careshare.app.services.token_issuer).

    Invitation      XXXX-XXXX-XXXX-XXXX        A-Z0-9
    Partnership     XXXXX-XXXXX-XXXXX-XXXXX    A-Z0-9
    Patient share   PAT-XXXX-XXXX-XXXX         A-Z0-9
    Password reset  32 chars, ungrouped        A-Za-z0-9
    OTP             6 digits, 100000-999999
"""

import secrets
import string

UPPERCASE_ALPHANUMERIC = string.ascii_uppercase + string.digits
MIXED_ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits

SHARE_TOKEN_PREFIX = "PAT"


def random_string(alphabet: str, length: int) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


def group(value: str, size: int, separator: str = "-") -> str:
    """Split value into separator-joined blocks of `size` characters"""
    return separator.join(value[i : i + size] for i in range(0, len(value), size))


def generate_invite_token() -> str:
    return group(random_string(UPPERCASE_ALPHANUMERIC, 16), 4)


def generate_partnership_token() -> str:
    return group(random_string(UPPERCASE_ALPHANUMERIC, 20), 5)


def generate_share_token() -> str:
    return f"{SHARE_TOKEN_PREFIX}-{group(random_string(UPPERCASE_ALPHANUMERIC, 12), 4)}"


def generate_reset_token() -> str:
    return random_string(MIXED_ALPHANUMERIC, 32)


def generate_otp_code() -> str:
    return str(100000 + secrets.randbelow(900000))
