# jwt_access/config.py
"""
Fixed settings for jwt-access.

The issuer core reads no environment variables; the only variable named here
is consulted by the command line interface.

Usage:
    from jwt_access.config import TOKEN_LIFETIME_SECONDS

Environment Variables (CLI only):
    JWT_ACCESS_CREDENTIALS: Path to a service account JSON file.
"""

from typing import Final

# =============================================================================
# Token Lifetime
# =============================================================================

# Validity window of every issued assertion (exp = iat + lifetime)
TOKEN_LIFETIME_SECONDS: Final[int] = 3600

# Cached assertions are renewed this many seconds before their exp claim
EXPIRY_SKEW_SECONDS: Final[int] = 60

# =============================================================================
# Header Format
# =============================================================================

AUTHORIZATION_HEADER: Final[str] = "Authorization"
BEARER_PREFIX: Final[str] = "Bearer "
TOKEN_TYPE: Final[str] = "JWT"

# =============================================================================
# Key Generation
# =============================================================================

DEFAULT_KEY_SIZE: Final[int] = 2048

# =============================================================================
# CLI
# =============================================================================

CREDENTIALS_ENV_VAR: Final[str] = "JWT_ACCESS_CREDENTIALS"
