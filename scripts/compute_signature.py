#!/usr/bin/env python3
"""Helper script to compute the timestamp/sign header pair for a request."""
import sys

from request_signer.config import settings
from request_signer.logging_utils import configure_logging
from request_signer.signer import RequestSigner

if len(sys.argv) < 2:
    print("Usage: python compute_signature.py <url> [body]")
    print("Example: SIGNER_SECRET=secret python compute_signature.py 'http://127.0.0.1:8080/api/ping' '{\"id\":1}'")
    sys.exit(1)

configure_logging(settings.log_level)

if not settings.validate_secret():
    print("error: Signing secret is not set. Set SIGNER_SECRET.", file=sys.stderr)
    sys.exit(2)

url = sys.argv[1]
body = sys.argv[2] if len(sys.argv) > 2 else None

signed = RequestSigner.from_settings(settings).sign(url, body)
for name, value in signed.as_dict().items():
    print(f"{name}: {value}")
