"""Shared test constants and an independent signature reference."""
import base64
import hashlib
import hmac

TEST_SECRET = "testsecret"
TEST_PREFIX = "http://testserver"
FIXED_NOW = 1700000000.0


def reference_signature(secret: str, message: str) -> str:
    """Independent HMAC-SHA256 -> base64 of the raw digest."""
    digest = hmac.new(secret.encode(), message.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()
