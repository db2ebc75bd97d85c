"""Pre-request signing hook for the ``requests`` library."""
import logging
from typing import Optional

from requests import PreparedRequest
from requests.auth import AuthBase

from request_signer.config import settings
from request_signer.logging_utils import configure_logging
from request_signer.metrics import signed_requests_total
from request_signer.signer import RequestSigner, append_header

logger = logging.getLogger(__name__)


class HmacSignatureAuth(AuthBase):
    """Attach ``timestamp`` / ``sign`` headers to every prepared request.

    Usage::

        session = requests.Session()
        session.auth = HmacSignatureAuth()
    """

    def __init__(self, signer: Optional[RequestSigner] = None, api_key: Optional[str] = None):
        configure_logging(settings.log_level)
        self.signer = signer or RequestSigner.from_settings()
        self.api_key = api_key if api_key is not None else settings.api_key

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        try:
            signed = self.signer.apply(r.headers, r.url, r.body)
        except Exception as e:
            logger.error(
                "Failed to sign request",
                extra={"method": r.method, "url": r.url, "error": str(e), "result": "error"},
            )
            signed_requests_total.labels(result="error").inc()
            raise
        if self.api_key:
            append_header(r.headers, "api-key", self.api_key)
        logger.info(
            "Signed request",
            extra={"method": r.method, "path": signed.path, "timestamp": signed.timestamp},
        )
        return r
