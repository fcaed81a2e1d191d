"""
Exception types raised by jwt-access.

Argument problems subclass ValueError so existing ``except ValueError``
handlers keep working, matching how the signer reports bad input.
"""


class JWTAccessError(Exception):
    """Base class for all jwt-access errors."""


class InvalidArgumentError(JWTAccessError, ValueError):
    """A required input was missing or malformed."""


class CredentialParseError(InvalidArgumentError):
    """Credential content could not be read or parsed as JSON."""


class InvalidStateError(JWTAccessError, RuntimeError):
    """The issuer has no signing identity yet."""


class SigningError(JWTAccessError):
    """The signing key could not be loaded or rejected the payload."""


class TokenDecodeError(JWTAccessError, ValueError):
    """A token is malformed or its signature does not verify."""
