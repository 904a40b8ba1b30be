"""
Adapters — Thin wrappers around storage and HTTP.

S3 (boto3), local filesystem, URL download (httpx) and document
conversion (markitdown). Adapters raise GatewayError; they never format
tool responses.
"""
