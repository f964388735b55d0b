"""Shared configuration for the CreditBanc report service.

Values come from the environment (optionally via a ``.env`` file at the
project root) with defaults suitable for local development.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Brand shown in the PDF footer
BRAND_NAME = os.getenv("CREDITBANC_BRAND_NAME", "CreditBanc")

# Optional header image drawn across the top of the first PDF page
HEADER_LOGO = os.getenv("CREDITBANC_HEADER_LOGO", "")

# Comma-separated list of origins allowed to call the web API
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CREDITBANC_CORS_ORIGINS", "*").split(",") if origin.strip()]

HOST = os.getenv("CREDITBANC_HOST", "0.0.0.0")
PORT = int(os.getenv("CREDITBANC_PORT", "8000"))

LOG_LEVEL = os.getenv("CREDITBANC_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

DEFAULT_TITLE = "Credit Report"


def header_logo_path() -> Path | None:
    """Return the configured header image path if it exists, else None."""
    if not HEADER_LOGO:
        return None
    path = Path(HEADER_LOGO).expanduser()
    if not path.is_absolute():
        path = ROOT / path
    return path if path.exists() else None
