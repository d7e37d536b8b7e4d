# app/core/security.py
import hashlib
import hmac
import secrets

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 100_000


def hash_password(password: str, salt: str | None = None) -> str:
    """
    Hash a password with PBKDF2-SHA256.

    Returns a self-describing string:
        pbkdf2_sha256$<iterations>$<salt>$<hex digest>
    """
    if salt is None:
        salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS
    ).hex()
    return f"{PBKDF2_ALGORITHM}${PBKDF2_ITERATIONS}${salt}${digest}"


def verify_password(password: str, stored: str | None) -> bool:
    """
    Check a plaintext password against a value produced by hash_password().

    Malformed or missing hashes never verify.
    """
    if not stored:
        return False
    try:
        algorithm, iterations, salt, expected = stored.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), rounds
    ).hex()
    return hmac.compare_digest(digest, expected)


def credentials_match(email: str, password: str, expected_email: str, expected_password: str) -> bool:
    """Constant-time comparison of a login pair against a configured pair."""
    email_ok = hmac.compare_digest(email.encode("utf-8"), expected_email.encode("utf-8"))
    password_ok = hmac.compare_digest(
        password.encode("utf-8"), expected_password.encode("utf-8")
    )
    return email_ok and password_ok
