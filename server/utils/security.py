"""
Security utilities: session key generation, password hashing.
"""
import hashlib
import hmac
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits


def generate_session_key(length=6):
    """Generate the short uppercase key a student types in at a station."""
    return ''.join(secrets.choice(KEY_ALPHABET) for _ in range(length))


def hash_password(password):
    """Hash a password using SHA-256 with a salt."""
    salt = secrets.token_hex(16)
    hashed = hashlib.sha256(f"{salt}:{password}".encode()).hexdigest()
    return f"{salt}:{hashed}"


def verify_password(password, stored_hash):
    """Verify a password against its stored hash."""
    if not stored_hash or ':' not in stored_hash:
        return False
    salt, expected_hash = stored_hash.split(':', 1)
    actual_hash = hashlib.sha256(f"{salt}:{password}".encode()).hexdigest()
    return hmac.compare_digest(actual_hash, expected_hash)
