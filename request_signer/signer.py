"""HMAC-SHA256 request signer producing the ``timestamp`` / ``sign`` header pair."""
import base64
import hashlib
import hmac
import logging
import time
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional, Union

from request_signer.config import Settings, settings as default_settings
from request_signer.metrics import signed_requests_total

logger = logging.getLogger(__name__)

Body = Union[str, bytes, bytearray, None]


class MissingSecretError(ValueError):
    """Raised when a signer is created without a shared secret."""


@dataclass(frozen=True)
class SignedHeaders:
    """Header values produced for a single request."""
    timestamp: str
    sign: str
    path: str
    timestamp_header: str = "timestamp"
    sign_header: str = "sign"

    def as_dict(self) -> dict[str, str]:
        return {
            self.timestamp_header: self.timestamp,
            self.sign_header: self.sign,
        }


def strip_prefix(url: str, prefix: str) -> str:
    """Remove the first occurrence of ``prefix`` from ``url``.

    No-op when the prefix is absent or empty.
    """
    if not prefix:
        return url
    return url.replace(prefix, "", 1)


def hex_to_base64(hexstring: str) -> str:
    """
    Re-encode a hex string as base64 of the same underlying bytes.

    Raises:
        ValueError: If ``hexstring`` is not valid hex.
    """
    return base64.b64encode(bytes.fromhex(hexstring)).decode("ascii")


def body_to_text(body: Body) -> str:
    """Render a request body as the string that goes into the signing input."""
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    raise TypeError(f"Cannot sign request body of type {type(body).__name__}")


def _secret_bytes(secret: Union[str, bytes]) -> bytes:
    if isinstance(secret, bytes):
        return secret
    return secret.encode("utf-8")


def compute_signature(
    secret: Union[str, bytes],
    timestamp: str,
    path: str,
    body: str = "",
) -> str:
    """Compute the base64 HMAC-SHA256 signature over timestamp + path + body."""
    message = f"{timestamp}{path}{body}".encode("utf-8")
    digest = hmac.new(_secret_bytes(secret), message, hashlib.sha256).hexdigest()
    return hex_to_base64(digest)


def append_header(headers: MutableMapping[str, str], name: str, value: str) -> None:
    """
    Add a header without discarding an existing one of the same name.

    Plain mappings cannot hold repeated fields, so an existing value is folded
    into a comma-separated list.
    """
    for key in list(headers.keys()):
        if key.lower() == name.lower():
            headers[key] = f"{headers[key]}, {value}"
            return
    headers[name] = value


class RequestSigner:
    """Signs outgoing requests with a shared secret."""

    def __init__(
        self,
        secret: Optional[Union[str, bytes]],
        prefix: str,
        clock: Callable[[], float] = time.time,
        timestamp_header: str = "timestamp",
        sign_header: str = "sign",
    ):
        if not secret:
            raise MissingSecretError("Signing secret is not set.")
        self.secret = secret
        self.prefix = prefix
        self.clock = clock
        self.timestamp_header = timestamp_header
        self.sign_header = sign_header

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ) -> "RequestSigner":
        settings = settings or default_settings
        return cls(
            secret=settings.secret,
            prefix=settings.prefix,
            clock=clock,
            timestamp_header=settings.timestamp_header,
            sign_header=settings.sign_header,
        )

    def now_ms(self) -> int:
        """Current time as epoch milliseconds."""
        return int(self.clock() * 1000)

    def prefix_matches(self, url: str) -> bool:
        return not self.prefix or self.prefix in url

    def sign(
        self,
        url: str,
        body: Body = None,
        timestamp_ms: Optional[int] = None,
    ) -> SignedHeaders:
        """
        Compute the header pair for a request.

        Args:
            url: Full request URL as the client will send it.
            body: Request body, or None when the request has none.
            timestamp_ms: Override for the epoch-millisecond timestamp.

        Returns:
            SignedHeaders with the timestamp, signature and signed path.

        Raises:
            TypeError: If the body cannot be rendered as a string.
            UnicodeDecodeError: If a bytes body is not UTF-8.
        """
        body_text = body_to_text(body)
        if timestamp_ms is None:
            timestamp_ms = self.now_ms()
        timestamp = str(timestamp_ms)
        path = strip_prefix(url, self.prefix)

        # One outcome per signing; a mismatched prefix still yields headers
        result = "signed"
        if not self.prefix_matches(url):
            result = "prefix_mismatch"
            logger.warning(
                "Request URL does not contain the signing prefix",
                extra={"url": url, "prefix": self.prefix, "result": result},
            )

        signature = compute_signature(self.secret, timestamp, path, body_text)
        signed_requests_total.labels(result=result).inc()
        logger.debug(
            "Request signed",
            extra={"url": url, "path": path, "timestamp": timestamp, "result": result},
        )
        return SignedHeaders(
            timestamp=timestamp,
            sign=signature,
            path=path,
            timestamp_header=self.timestamp_header,
            sign_header=self.sign_header,
        )

    def apply(
        self,
        headers: MutableMapping[str, str],
        url: str,
        body: Body = None,
    ) -> SignedHeaders:
        """Sign a request and append the header pair to ``headers``."""
        signed = self.sign(url, body)
        for name, value in signed.as_dict().items():
            append_header(headers, name, value)
        return signed
