"""
Service account credential decoding.

Turns the JSON credential shape (an in-memory mapping, raw bytes, or a
readable stream) into a validated ServiceAccountCredentials record.
"""

import json
import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jwt_access.errors import CredentialParseError, InvalidArgumentError

logger = logging.getLogger(__name__)


class ServiceAccountCredentials(BaseModel):
    """
    Service account credentials as found in a key file.

    Only ``client_email`` and ``private_key`` are required. Unknown fields
    are ignored so full key files can be passed straight through.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    client_email: str = Field(min_length=1)
    private_key: str = Field(min_length=1)
    private_key_id: Optional[str] = None
    client_id: Optional[str] = None
    type: Optional[str] = None


def parse_credentials(data: Any) -> ServiceAccountCredentials:
    """
    Validate a decoded credential object.

    Args:
        data: Mapping with at least ``client_email`` and ``private_key``.

    Returns:
        The validated credentials.

    Raises:
        InvalidArgumentError: If data is None, not an object, or is missing
            a required field.
    """
    if data is None:
        raise InvalidArgumentError("Must pass in a JSON object containing the service account auth settings")

    if isinstance(data, ServiceAccountCredentials):
        return data

    try:
        return ServiceAccountCredentials.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        if fields:
            raise InvalidArgumentError(
                f"Invalid service account credentials: bad or missing {', '.join(fields)}"
            ) from e
        raise InvalidArgumentError(f"Invalid service account credentials: {e}") from e


def load_credentials_bytes(raw: Union[bytes, str]) -> ServiceAccountCredentials:
    """Decode and validate credential JSON held in memory."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CredentialParseError(f"Credential content is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialParseError(f"Credential content is not valid JSON: {e}") from e

    return parse_credentials(data)


def _to_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(f"Stream yielded {type(chunk).__name__}, expected bytes or str")


def _check_stream(stream: Any) -> None:
    if stream is None:
        raise InvalidArgumentError("Must pass in a stream containing the service account auth settings")
    if isinstance(stream, (str, bytes, bytearray, memoryview)):
        raise InvalidArgumentError(
            f"Expected a readable stream, got {type(stream).__name__}; use load_credentials_bytes for in-memory content"
        )


def read_stream(stream: Any) -> bytes:
    """
    Drain a readable source to completion.

    Accepts file-like objects (binary or text) and plain iterables of chunks.

    Raises:
        InvalidArgumentError: If stream is None or is raw content rather than a stream.
        CredentialParseError: If reading or decoding fails.
    """
    _check_stream(stream)

    try:
        if hasattr(stream, "read"):
            data = _to_bytes(stream.read())
        else:
            data = b"".join(_to_bytes(chunk) for chunk in stream)
    except (OSError, ValueError, TypeError) as e:
        raise CredentialParseError(f"Failed to read credential stream: {e}") from e

    logger.debug(f"Read {len(data)} bytes of credentials from stream")
    return data


async def read_async_stream(stream: Any) -> bytes:
    """Async counterpart of read_stream for coroutine ``read()`` or async iterables."""
    _check_stream(stream)

    try:
        if hasattr(stream, "read"):
            data = _to_bytes(await stream.read())
        else:
            data = b"".join([_to_bytes(chunk) async for chunk in stream])
    except (OSError, ValueError, TypeError) as e:
        raise CredentialParseError(f"Failed to read credential stream: {e}") from e

    logger.debug(f"Read {len(data)} bytes of credentials from async stream")
    return data
