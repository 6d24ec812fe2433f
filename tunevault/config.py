"""Configuration: env, object-store credentials, cache and streaming tunables."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of tunevault package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so AWS_BUCKET_NAME etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("TUNEVAULT_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "4000"))
LOG_LEVEL = os.getenv("TUNEVAULT_LOG_LEVEL", "INFO").upper()

# Object store (S3 or any S3-compatible endpoint)
AWS_REGION = os.getenv("AWS_REGION", "")
AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_BUCKET_NAME = os.getenv("AWS_BUCKET_NAME", "")
AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL", "")

# Library layout: albums/<Artist - Album>/<File>
LIBRARY_PREFIX = os.getenv("TUNEVAULT_LIBRARY_PREFIX", "albums/")
LIST_PAGE_SIZE = int(os.getenv("TUNEVAULT_LIST_PAGE_SIZE", "1000"))

# Folder mapping cache lifetime (seconds)
MAPPING_TTL_SEC = float(os.getenv("TUNEVAULT_MAPPING_TTL_SEC", "300"))

# Streaming
STREAM_CHUNK_SIZE = int(os.getenv("TUNEVAULT_STREAM_CHUNK_SIZE", str(64 * 1024)))
CACHE_CONTROL = "public, max-age=31536000"  # one year
SIGNED_URL_EXPIRES = int(os.getenv("TUNEVAULT_SIGNED_URL_EXPIRES", "3600"))


def validate_config() -> None:
    """Raise RuntimeError listing required settings that are missing."""
    missing = [name for name, value in (("AWS_BUCKET_NAME", AWS_BUCKET_NAME),) if not value]
    if missing:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")
