"""
S3 storage adapter — text documents in S3-compatible object storage.

Implements the DocumentStore contract used by the file tools:
- read(path) -> text (PDF/DOCX converted via markitdown)
- write(path, content) -> WriteReceipt

Paths are resolved against the credentials' default bucket when it has one,
otherwise the first path segment names the bucket.
"""

from typing import Any

from adapters.conversion import convert_to_text
from adapters.services import get_s3_client
from config import CONVERTIBLE_SUFFIXES
from logging_config import log_api_call, log_api_result, logger
from models import ErrorKind, GatewayError, S3Credentials, S3Location, WriteReceipt
from retry import with_retry
from validation import guess_content_type, parse_s3_path, path_suffix

__all__ = ["S3DocumentStore"]


class S3DocumentStore:
    """DocumentStore backed by an S3-compatible bucket."""

    def __init__(self, credentials: S3Credentials, client: Any | None = None):
        self.credentials = credentials
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_s3_client(self.credentials)
        return self._client

    def locate(self, path: str) -> S3Location:
        """Resolve a tool path, turning bad paths into INVALID_INPUT."""
        try:
            return parse_s3_path(path, self.credentials.bucket)
        except ValueError as e:
            raise GatewayError(ErrorKind.INVALID_INPUT, str(e)) from e

    def read_bytes(self, path: str) -> bytes:
        """Raw object body."""
        location = self.locate(path)
        data = self._get_object(location)
        log_api_result("s3", "get_object", len(data))
        return data

    def read(self, path: str) -> str:
        """
        Object body as text.

        Raises:
            GatewayError: NOT_FOUND, PERMISSION_DENIED, INVALID_INPUT (not UTF-8),
                EXTRACTION_FAILED (PDF/DOCX conversion)
        """
        data = self.read_bytes(path)
        suffix = path_suffix(path)
        if suffix in CONVERTIBLE_SUFFIXES:
            return convert_to_text(data, suffix)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GatewayError(
                ErrorKind.INVALID_INPUT,
                f"{path} is not a UTF-8 text file ({len(data)} bytes)",
            ) from e

    def write(self, path: str, content: str | bytes) -> WriteReceipt:
        """
        Create or overwrite an object.

        Raises:
            GatewayError: PERMISSION_DENIED, QUOTA_EXCEEDED, NOT_FOUND (bucket)
        """
        location = self.locate(path)
        body = content.encode("utf-8") if isinstance(content, str) else content
        content_type = guess_content_type(path)

        response = self._put_object(location, body, content_type)
        log_api_result("s3", "put_object", len(body))
        logger.info(f"Wrote {len(body)} bytes to s3://{location.bucket}/{location.key}")

        return WriteReceipt(
            path=path,
            size=len(body),
            content_type=content_type,
            etag=(response.get("ETag") or "").strip('"') or None,
            version_id=response.get("VersionId"),
        )

    @with_retry(max_attempts=3, delay_ms=1000)
    def _get_object(self, location: S3Location) -> bytes:
        log_api_call("s3", "get_object", bucket=location.bucket, key=location.key)
        response = self.client.get_object(Bucket=location.bucket, Key=location.key)
        return response["Body"].read()

    @with_retry(max_attempts=3, delay_ms=1000)
    def _put_object(self, location: S3Location, body: bytes, content_type: str) -> dict[str, Any]:
        log_api_call(
            "s3", "put_object",
            bucket=location.bucket, key=location.key,
            size=len(body), content_type=content_type,
        )
        return self.client.put_object(
            Bucket=location.bucket,
            Key=location.key,
            Body=body,
            ContentType=content_type,
        )
