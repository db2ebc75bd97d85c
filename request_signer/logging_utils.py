"""Structured JSON logging utilities."""
import json
import logging
from datetime import datetime, timezone

# Package logger; module loggers (request_signer.*) propagate into it
logger = logging.getLogger("request_signer")
handler = logging.StreamHandler()

EXTRA_FIELDS = ("method", "url", "path", "timestamp", "prefix", "result", "error")


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs."""
    
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        
        # Add extra fields if present
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)
        
        return json.dumps(log_data)


def configure_logging(level: str = "INFO"):
    """Configure logging level."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    handler.setLevel(log_level)


handler.setFormatter(JSONFormatter())
if handler not in logger.handlers:
    logger.addHandler(handler)
logger.propagate = False
configure_logging()
