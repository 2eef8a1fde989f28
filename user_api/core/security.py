import bcrypt

from user_api.config import get_settings

# bcrypt only consumes the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Return a bcrypt hash of the plaintext. No verify counterpart is exposed."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode()[:_BCRYPT_MAX_BYTES], salt).decode()
