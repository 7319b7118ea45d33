"""Human-typeable redemption tokens such as ``WB-AB23C``."""

import secrets

TOKEN_PREFIX = 'WB-'
# No 0/O or 1/I
TOKEN_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
TOKEN_LENGTH = 5


def generate_token() -> str:
    return TOKEN_PREFIX + ''.join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def normalize_token(raw) -> str:
    """Trim what staff typed; matching is case-insensitive downstream."""
    return (raw or '').strip()
