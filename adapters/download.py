"""
Download adapter — fetch a URL's bytes with httpx.

Used by write_to_file when content comes from a URL instead of inline text.
Streams the body and stops at MAX_DOWNLOAD_BYTES so a huge file can't
exhaust memory.
"""

from urllib.parse import urlsplit

import httpx

from config import DOWNLOAD_TIMEOUT, MAX_DOWNLOAD_BYTES, USER_AGENT
from logging_config import log_api_call, log_api_result
from models import GatewayError, ErrorKind
from retry import with_retry

__all__ = ["download_from_url", "is_web_url"]


def is_web_url(url: str) -> bool:
    """http(s) URL with a host."""
    parts = urlsplit(url.strip())
    return parts.scheme in ("http", "https") and bool(parts.netloc)


@with_retry(max_attempts=3, delay_ms=1000)
def download_from_url(url: str, max_bytes: int = MAX_DOWNLOAD_BYTES) -> bytes:
    """
    Download a URL's body.

    Args:
        url: http(s) URL
        max_bytes: Refuse bodies larger than this

    Returns:
        Response body bytes

    Raises:
        GatewayError: INVALID_INPUT (bad URL, too large), NOT_FOUND (404),
            TIMEOUT / NETWORK_ERROR (retryable)
    """
    if not is_web_url(url):
        raise GatewayError(ErrorKind.INVALID_INPUT, f"Not an http(s) URL: {url}")

    log_api_call("http", "GET", url=url)
    chunks: list[bytes] = []
    total = 0

    try:
        with httpx.Client(
            follow_redirects=True,
            timeout=httpx.Timeout(DOWNLOAD_TIMEOUT),
        ) as client:
            with client.stream(
                "GET",
                url,
                headers={
                    'User-Agent': USER_AGENT,
                    'Accept': '*/*',
                },
            ) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes(chunk_size=64 * 1024):
                    total += len(chunk)
                    if total > max_bytes:
                        raise GatewayError(
                            ErrorKind.INVALID_INPUT,
                            f"Download exceeds {max_bytes} bytes: {url}",
                        )
                    chunks.append(chunk)

    except httpx.TimeoutException:
        raise GatewayError(ErrorKind.TIMEOUT, f"Download timed out: {url}", retryable=True)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        if status == 404:
            raise GatewayError(ErrorKind.NOT_FOUND, f"Download failed (404): {url}")
        if status in (401, 403):
            raise GatewayError(ErrorKind.PERMISSION_DENIED, f"Download failed ({status}): {url}")
        raise GatewayError(
            ErrorKind.NETWORK_ERROR,
            f"Download failed ({status}): {url}",
            retryable=status == 429 or status >= 500,
        )
    except httpx.RequestError as e:
        raise GatewayError(ErrorKind.NETWORK_ERROR, f"Download failed: {url} - {e}", retryable=True)

    data = b"".join(chunks)
    log_api_result("http", "GET", len(data))
    return data
