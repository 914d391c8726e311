import os
import sys
import json
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file in project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

logger = logging.getLogger(__name__)

BASE_URLS = {
    "test": "https://test.api.amadeus.com",
    "production": "https://api.amadeus.com",
}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration management for the Amadeus MCP server."""

    # Amadeus client credentials (OAuth2 client_credentials grant)
    AMADEUS_CLIENT_ID = os.getenv("AMADEUS_CLIENT_ID")
    AMADEUS_CLIENT_SECRET = os.getenv("AMADEUS_CLIENT_SECRET")
    AMADEUS_ENVIRONMENT = os.getenv("AMADEUS_ENVIRONMENT", "test").lower()

    # Transport
    PORT = int(os.getenv("PORT", "3000"))
    MCP_HTTP_ENABLED = _env_flag("MCP_HTTP_ENABLED")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def has_credentials(cls) -> bool:
        return bool(cls.AMADEUS_CLIENT_ID and cls.AMADEUS_CLIENT_SECRET)

    @classmethod
    def base_url(cls) -> str:
        return BASE_URLS.get(cls.AMADEUS_ENVIRONMENT, BASE_URLS["test"])

    @classmethod
    def validate(cls):
        """Check for missing critical keys."""
        missing = []
        if not cls.AMADEUS_CLIENT_ID:
            missing.append("AMADEUS_CLIENT_ID")
        if not cls.AMADEUS_CLIENT_SECRET:
            missing.append("AMADEUS_CLIENT_SECRET")
        if cls.AMADEUS_ENVIRONMENT not in BASE_URLS:
            logger.warning(
                f"Unknown AMADEUS_ENVIRONMENT '{cls.AMADEUS_ENVIRONMENT}', using test host"
            )

        if missing:
            logger.warning(f"Missing keys: {', '.join(missing)}. Tools will return mock data.")
            logger.warning("Please create a .env file based on .env.example")
            return False
        return True


def setup_logging(level="INFO", stream=None):
    """Configure structured JSON logging.

    Logs go to stderr by default so stdout stays reserved for the stdio protocol.
    """
    handler = logging.StreamHandler(stream or sys.stderr)

    class JsonFormatter(logging.Formatter):
        def format(self, record):
            log_record = {
                "timestamp": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "message": record.getMessage(),
                "module": record.module,
                "function": record.funcName,
            }
            if hasattr(record, "tool"):
                log_record["tool"] = record.tool
            if hasattr(record, "session_id"):
                log_record["session_id"] = record.session_id
            if record.exc_info:
                log_record["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_record)

    handler.setFormatter(JsonFormatter())

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplication
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
