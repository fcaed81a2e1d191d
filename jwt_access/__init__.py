"""
jwt-access - Self-signed JWT access tokens for service-to-service calls.

Signs audience-bound tokens with a service account's own private key, so
outbound requests can be authorized without asking a token server first.
"""

__version__ = "0.1.0"

# Core issuer
from .access import JWTAccess
from .cache import AssertionCache, CachedAssertion

# Credentials and keys
from .credentials import ServiceAccountCredentials, parse_credentials
from .keys import ServiceAccountKey, generate_service_account

# Signing and inspection
from .signing import sign
from .decode import DecodedToken, decode_token

# Errors
from .errors import (
    JWTAccessError,
    InvalidArgumentError,
    CredentialParseError,
    InvalidStateError,
    SigningError,
    TokenDecodeError,
)


__all__ = [
    "__version__",
    # Core
    "JWTAccess",
    "AssertionCache",
    "CachedAssertion",
    # Credentials
    "ServiceAccountCredentials",
    "parse_credentials",
    "ServiceAccountKey",
    "generate_service_account",
    # Signing
    "sign",
    "DecodedToken",
    "decode_token",
    # Errors
    "JWTAccessError",
    "InvalidArgumentError",
    "CredentialParseError",
    "InvalidStateError",
    "SigningError",
    "TokenDecodeError",
]
