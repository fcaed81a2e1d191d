"""
JWT Access - self-signed service account tokens.

Builds audience-bound JWTs from a service account identity and turns them
into Authorization headers, skipping the round trip to a token server.
"""

import logging
import time
from typing import Any, Dict, Optional

from jwt_access.cache import AssertionCache, CachedAssertion
from jwt_access.config import (
    AUTHORIZATION_HEADER,
    BEARER_PREFIX,
    TOKEN_LIFETIME_SECONDS,
    TOKEN_TYPE,
)
from jwt_access.credentials import (
    ServiceAccountCredentials,
    load_credentials_bytes,
    parse_credentials,
    read_async_stream,
    read_stream,
)
from jwt_access.errors import InvalidArgumentError, InvalidStateError
from jwt_access.signing import KeyMaterial, sign

logger = logging.getLogger(__name__)


class JWTAccess:
    """
    Issues self-signed JWT access tokens for a service account.

    The token's issuer and subject are the service account email and its
    audience is the URI being called. One token is cached per audience and
    reused until shortly before it expires.

    Example:
        >>> client = JWTAccess('svc@project.iam.example.com', private_key_pem)
        >>> headers = client.get_request_metadata('https://pubsub.example.com/')
        >>> headers['Authorization']
        'Bearer eyJ...'

        # Identity can also be loaded afterwards
        >>> client = JWTAccess()
        >>> with open('service-account.json', 'rb') as f:
        ...     client.from_stream(f)
    """

    def __init__(
        self,
        email: Optional[str] = None,
        key: Optional[KeyMaterial] = None,
        key_id: Optional[str] = None,
    ):
        """
        Initialize the issuer. Nothing is validated here.

        Args:
            email: Service account email used as ``iss`` and ``sub``.
            key: Private key (PEM, JWK JSON, ``jwk.JWK`` or a cryptography key).
            key_id: Optional key identifier written to the ``kid`` header.
        """
        self.email = email
        self.key = key
        self.key_id = key_id
        self._cache = AssertionCache()
        self._signatures = 0

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def from_service_account_info(cls, info: Any) -> "JWTAccess":
        """Create an issuer from a decoded service account JSON object."""
        return cls().from_json(info)

    @classmethod
    def from_service_account_file(cls, path: str) -> "JWTAccess":
        """Create an issuer from a service account JSON file."""
        with open(path, "rb") as f:
            return cls().from_stream(f)

    # -------------------------------------------------------------------------
    # Identity loading
    # -------------------------------------------------------------------------

    def from_json(self, credentials: Any) -> "JWTAccess":
        """
        Load the identity from a service account JSON object.

        Args:
            credentials: Mapping with ``client_email`` and ``private_key``,
                optionally ``private_key_id``.

        Returns:
            self, for chaining.

        Raises:
            InvalidArgumentError: If credentials is None or lacks a required field.
        """
        try:
            parsed = parse_credentials(credentials)
        except InvalidArgumentError as e:
            logger.warning(f"Rejected service account credentials: {e}")
            raise
        self._apply(parsed)
        return self

    def from_stream(self, stream: Any) -> "JWTAccess":
        """
        Load the identity from a stream yielding service account JSON.

        The stream is read to completion before anything is assigned, so a
        truncated or malformed payload leaves the current identity as it was.

        Raises:
            InvalidArgumentError: If stream is None or required fields are missing.
            CredentialParseError: If the content cannot be read or parsed.
        """
        try:
            parsed = load_credentials_bytes(read_stream(stream))
        except InvalidArgumentError as e:
            logger.warning(f"Failed to load credentials from stream: {e}")
            raise
        self._apply(parsed)
        return self

    async def from_async_stream(self, stream: Any) -> "JWTAccess":
        """Like from_stream, for sources whose ``read()`` is a coroutine."""
        try:
            parsed = load_credentials_bytes(await read_async_stream(stream))
        except InvalidArgumentError as e:
            logger.warning(f"Failed to load credentials from stream: {e}")
            raise
        self._apply(parsed)
        return self

    def _apply(self, credentials: ServiceAccountCredentials) -> None:
        self.email = credentials.client_email
        self.key = credentials.private_key
        self.key_id = credentials.private_key_id
        # Tokens signed by the previous identity must not be served
        self._cache.clear()
        logger.info(f"Loaded service account identity {self.email}")

    @property
    def has_identity(self) -> bool:
        """Whether both email and key are set. Blank key strings count as unset."""
        if not self.email or self.key is None:
            return False
        return not (isinstance(self.key, (str, bytes)) and not self.key.strip())

    # -------------------------------------------------------------------------
    # Token issuance
    # -------------------------------------------------------------------------

    def create_scoped_required(self) -> bool:
        """Self-signed tokens are bound to an audience, never to scopes."""
        return False

    def get_request_metadata(self, target_uri: str) -> Dict[str, str]:
        """
        Build request headers carrying a JWT for target_uri.

        Args:
            target_uri: The URI being called; used as the token audience.

        Returns:
            ``{"Authorization": "Bearer <token>"}``

        Raises:
            InvalidStateError: If email or key has not been set.
            InvalidArgumentError: If target_uri is empty.
            SigningError: If the key cannot sign the token.
        """
        if not self.has_identity:
            raise InvalidStateError(
                "JWTAccess requires a service account email and private key to generate metadata"
            )
        if not target_uri:
            raise InvalidArgumentError("A target URI is required as the token audience")

        now = time.time()
        cached = self._cache.get(target_uri, now)
        if cached is not None:
            logger.debug(f"Reusing cached token for {target_uri}")
            return self._headers(cached.token)

        entry = self._create_assertion(target_uri, int(now))
        self._cache.set(entry)
        return self._headers(entry.token)

    def _create_assertion(self, audience: str, iat: int) -> CachedAssertion:
        exp = iat + TOKEN_LIFETIME_SECONDS
        claims = {
            "iss": self.email,
            "sub": self.email,
            "aud": audience,
            "iat": iat,
            "exp": exp,
        }

        header = {"typ": TOKEN_TYPE}
        if self.key_id:
            header["kid"] = self.key_id

        token = sign(header, claims, self.key)
        self._signatures += 1
        logger.info(f"Signed new token for {audience} (exp={exp})")

        return CachedAssertion(audience=audience, token=token, expires_at=exp)

    @staticmethod
    def _headers(token: str) -> Dict[str, str]:
        return {AUTHORIZATION_HEADER: f"{BEARER_PREFIX}{token}"}

    @property
    def stats(self) -> Dict[str, int]:
        """Return issuance statistics."""
        cache_stats = self._cache.stats
        return {
            "signatures": self._signatures,
            "cache_hits": cache_stats["hits"],
            "cache_misses": cache_stats["misses"],
        }
