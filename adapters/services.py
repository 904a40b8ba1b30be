"""
S3 client initialization.

Shared by all storage adapters. Builds boto3 clients from parsed credentials.
Uses lru_cache for thread-safe caching (one client per credential set).

All clients use a 60-second timeout to prevent indefinite hangs
when the endpoint is slow or connections stall. botocore's own retries are
disabled; retry.with_retry owns backoff.
"""

import re
from functools import lru_cache
from typing import Any
from urllib.parse import urlsplit

import boto3
from botocore.config import Config

from config import DEFAULT_REGION, S3_TIMEOUT
from models import S3Credentials

__all__ = [
    "get_s3_client",
    "region_for_endpoint",
    "uses_path_style",
    "clear_client_cache",
]

# s3.eu-west-2.amazonaws.com, s3-eu-west-2.amazonaws.com, bucket.s3.eu-west-2.amazonaws.com
AWS_REGION_PATTERN = re.compile(r'(?:^|\.)s3[.-]([a-z0-9-]+)\.amazonaws\.com$')


def _host(endpoint: str) -> str:
    return urlsplit(endpoint).hostname or ""


def uses_path_style(endpoint: str) -> bool:
    """Non-AWS endpoints (R2, MinIO, Ceph) need path-style addressing."""
    return not _host(endpoint).endswith("amazonaws.com")


def region_for_endpoint(endpoint: str) -> str:
    """Region from an AWS host, else the default (ignored by most non-AWS stores)."""
    match = AWS_REGION_PATTERN.search(_host(endpoint))
    if match and match.group(1) != "external-1":
        return match.group(1)
    return DEFAULT_REGION


@lru_cache(maxsize=8)
def get_s3_client(credentials: S3Credentials) -> Any:
    """Get an S3 client for these credentials (cached, thread-safe)."""
    addressing = "path" if uses_path_style(credentials.endpoint) else "virtual"
    return boto3.client(
        "s3",
        endpoint_url=credentials.endpoint,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        region_name=region_for_endpoint(credentials.endpoint),
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": addressing},
            connect_timeout=S3_TIMEOUT,
            read_timeout=S3_TIMEOUT,
            retries={"max_attempts": 1, "mode": "standard"},
        ),
    )


def clear_client_cache() -> None:
    """Clear cached clients. Useful for testing or after rotating keys."""
    get_s3_client.cache_clear()
