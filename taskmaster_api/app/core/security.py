"""
Security helpers for password hashing, access tokens and caller identity.

Tokens are compact JSON Web Tokens signed with HMAC-SHA256 and
base64url encoded.  They embed the user id as ``sub`` and an
expiration timestamp (``exp``).  Passwords are hashed with
PBKDF2-HMAC-SHA256 and a random salt; the stored string records the
iteration count so hashes made with different settings still verify.

Caller identity is resolved by a ``CredentialResolver``.  The
application keeps one resolver for the profile route and one for the
task routes on ``app.state``; while the corresponding known defect is
active that resolver is the stub which ignores credentials entirely.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings
from .defects import DEFAULT_USER_ID, KNOWN_DEFECT_AUTH_BYPASS
from .errors import AuthError


logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field holding the expiration
    time as a UNIX timestamp.  Clients send the token back in the
    ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "1"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret_key : Optional[str]
        Signing key; defaults to ``settings.secret_key``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload dictionary when the signature matches and the
    ``exp`` claim lies in the future, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The result
    has the form ``iterations$salthex$hashhex``.
    """
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a string made by ``hash_password``."""
    try:
        iterations, salt_hex, hash_hex = hashed_password.split('$', 2)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(dk, stored_hash)


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------

class CredentialResolver(ABC):
    """Turn request credentials into a user id.

    Subclasses raise ``AuthError`` when the credentials are not
    acceptable.
    """

    @abstractmethod
    def resolve(self, credentials: Optional[HTTPAuthorizationCredentials]) -> int:
        ...


class StubCredentialResolver(CredentialResolver):
    """Resolver that accepts everybody as the demo user.

    This is ``KNOWN_DEFECT_AUTH_BYPASS``: the ``Authorization`` header
    is never looked at.
    """

    def resolve(self, credentials: Optional[HTTPAuthorizationCredentials]) -> int:
        logger.debug("%s: resolving caller as user %s", KNOWN_DEFECT_AUTH_BYPASS, DEFAULT_USER_ID)
        return DEFAULT_USER_ID


class TokenCredentialResolver(CredentialResolver):
    """Resolver that requires a valid bearer token issued by this API."""

    def __init__(self, app_settings: Settings) -> None:
        self.settings = app_settings

    def resolve(self, credentials: Optional[HTTPAuthorizationCredentials]) -> int:
        if credentials is None:
            raise AuthError("Not authenticated")
        payload = decode_access_token(credentials.credentials, secret_key=self.settings.secret_key)
        if not payload:
            raise AuthError("Invalid or expired token")
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthError("Invalid or expired token")


def build_resolver(bypass: bool, app_settings: Settings) -> CredentialResolver:
    """Pick the stub resolver while ``bypass`` holds, the token resolver otherwise."""
    if bypass:
        return StubCredentialResolver()
    return TokenCredentialResolver(app_settings)


security = HTTPBearer(auto_error=False)


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Dependency resolving the caller of the user routes."""
    return request.app.state.profile_resolver.resolve(credentials)


def get_task_owner_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Dependency resolving the owner of the tasks a request operates on."""
    return request.app.state.task_resolver.resolve(credentials)
