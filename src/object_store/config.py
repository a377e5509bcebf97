"""Immutable configuration for an ObjectStore instance."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreCredentials(BaseModel):
    """Static credentials handed to the S3 client."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str = Field(..., description="Access key id")
    secret_access_key: str = Field(..., description="Secret access key")
    session_token: Optional[str] = Field(
        default=None, description="Session token for temporary credentials"
    )


class StoreConfig(BaseModel):
    """
    Connection and namespace settings for an ObjectStore.

    Created once and never mutated; assigning to a field raises a
    ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(..., min_length=1, description="Endpoint URL of the S3-compatible store")
    region: str = Field(..., description="Region name passed to the client")
    credentials: StoreCredentials = Field(..., description="Client credentials")
    bucket: Optional[str] = Field(
        default=None, description="Default bucket, used when a request names none"
    )
    key_prefix: str = Field(default="", description="Prefix applied to every object key")

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build a config from the process environment.

        Raises:
            ValueError: If S3_ENDPOINT_URL is not set.
        """
        endpoint = os.getenv("S3_ENDPOINT_URL")
        if not endpoint:
            raise ValueError("Endpoint required: set S3_ENDPOINT_URL")

        return cls(
            endpoint=endpoint,
            region=os.getenv("S3_REGION", "auto"),
            credentials=StoreCredentials(
                access_key_id=os.getenv("AWS_ACCESS_KEY_ID", ""),
                secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", ""),
                session_token=os.getenv("AWS_SESSION_TOKEN"),
            ),
            bucket=os.getenv("OBJECT_STORAGE_BUCKET_NAME") or os.getenv("S3_BUCKET_NAME"),
            key_prefix=os.getenv("OBJECT_STORAGE_KEY_PREFIX", ""),
        )
