"""
Password hashing and access token helpers.

Passwords are stored as salted PBKDF2-SHA256 digests; access tokens are
HS256 JWTs signed with the configured secret.

Dependencies: hashlib, python-jose
System role: Credential primitives for the auth service
"""

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from resourcehub.core.exceptions import AuthenticationError

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int) -> str:
    """
    Create a salted password hash.

    Returns:
        str: "pbkdf2_sha256$<iterations>$<salt>$<digest>"
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    encoded = base64.b64encode(digest).decode()
    return f"{_HASH_SCHEME}${iterations}${salt}${encoded}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored hash in constant time."""
    try:
        scheme, iterations, salt, encoded = stored_hash.split("$", 3)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if scheme != _HASH_SCHEME or rounds < 1:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), rounds)
    return hmac.compare_digest(base64.b64encode(digest), encoded.encode())


def create_access_token(
    subject: str,
    claims: dict[str, Any],
    secret_key: str,
    algorithm: str,
    expires_minutes: int,
) -> tuple[str, datetime]:
    """
    Sign an access token for a subject.

    Returns:
        tuple[str, datetime]: (token, expires_at)
    """
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {**claims, "sub": subject, "exp": expires_at}
    return jwt.encode(payload, secret_key, algorithm=algorithm), expires_at


def decode_access_token(token: str, secret_key: str, algorithm: str) -> dict[str, Any]:
    """
    Decode and verify an access token.

    Raises:
        AuthenticationError: If the token is malformed, tampered or expired
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired access token") from e
    if not payload.get("sub"):
        raise AuthenticationError("Access token has no subject")
    return payload
