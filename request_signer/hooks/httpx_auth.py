"""Pre-request signing hook for ``httpx`` clients (and FastAPI's TestClient)."""
import logging
from typing import Generator, Optional

import httpx

from request_signer.config import settings
from request_signer.logging_utils import configure_logging
from request_signer.metrics import signed_requests_total
from request_signer.signer import RequestSigner

logger = logging.getLogger(__name__)


class HmacSignatureHttpxAuth(httpx.Auth):
    """Sign each request; existing fields with the same names are kept as repeats."""

    requires_request_body = True

    def __init__(self, signer: Optional[RequestSigner] = None, api_key: Optional[str] = None):
        configure_logging(settings.log_level)
        self.signer = signer or RequestSigner.from_settings()
        self.api_key = api_key if api_key is not None else settings.api_key

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        url = str(request.url)
        try:
            signed = self.signer.sign(url, request.content)
        except Exception as e:
            logger.error(
                "Failed to sign request",
                extra={"method": request.method, "url": url, "error": str(e), "result": "error"},
            )
            signed_requests_total.labels(result="error").inc()
            raise

        extra_fields = list(signed.as_dict().items())
        if self.api_key:
            extra_fields.append(("api-key", self.api_key))
        request.headers = httpx.Headers(list(request.headers.multi_items()) + extra_fields)

        logger.info(
            "Signed request",
            extra={"method": request.method, "path": signed.path, "timestamp": signed.timestamp},
        )
        yield request
