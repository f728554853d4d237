# backend/utils/hashing.py
import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
MAX_PASSWORD_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


# Hash a plaintext password with a fresh salt
def get_password_hash(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


# Check a plaintext password against a stored hash; malformed hashes never match
def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_secret(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
