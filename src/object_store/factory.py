"""Factory for creating an ObjectStore from environment configuration."""

import logging
from typing import Optional

from dotenv import load_dotenv

from .config import StoreConfig
from .store import ObjectStore

log = logging.getLogger(__name__)


def create_object_store(env_path: Optional[str] = None) -> ObjectStore:
    """Create an ObjectStore configured from environment variables.

    Variables read: S3_ENDPOINT_URL (required), S3_REGION (default "auto"),
    AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN,
    OBJECT_STORAGE_BUCKET_NAME or S3_BUCKET_NAME, OBJECT_STORAGE_KEY_PREFIX.

    Args:
        env_path: Optional .env file loaded first. Variables already set in
            the environment take precedence.

    Raises:
        ValueError: If S3_ENDPOINT_URL is not set.
    """
    if env_path:
        load_dotenv(env_path)

    config = StoreConfig.from_env()
    log.info(
        "Creating object store. Endpoint: %s, Bucket: %s, Prefix: %s",
        config.endpoint,
        config.bucket or "(per request)",
        config.key_prefix or "(none)",
    )
    return ObjectStore(config)
