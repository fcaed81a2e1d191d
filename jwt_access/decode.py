"""
Token inspection.

Splits a compact JWT into its header and claims, optionally checking the
signature against a public key.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from jwcrypto import jwk, jws
from jwcrypto.common import JWException

from jwt_access.errors import TokenDecodeError

logger = logging.getLogger(__name__)


@dataclass
class DecodedToken:
    """Header and claims of a decoded JWT."""

    header: Dict[str, Any]
    claims: Dict[str, Any]
    verified: bool = False
    raw: str = field(default="", repr=False)

    @property
    def iss(self) -> Optional[str]:
        return self.claims.get("iss")

    @property
    def sub(self) -> Optional[str]:
        return self.claims.get("sub")

    @property
    def aud(self) -> Optional[str]:
        return self.claims.get("aud")

    @property
    def exp(self) -> Optional[int]:
        return self.claims.get("exp")


def _load_public_key(public_key: Union[str, bytes, jwk.JWK]) -> jwk.JWK:
    if isinstance(public_key, jwk.JWK):
        return public_key
    if isinstance(public_key, str):
        if public_key.lstrip().startswith("{"):
            return jwk.JWK.from_json(public_key)
        public_key = public_key.encode("utf-8")
    return jwk.JWK.from_pem(public_key)


def decode_token(token: str, public_key: Optional[Union[str, bytes, jwk.JWK]] = None) -> DecodedToken:
    """
    Decode a compact JWT.

    Args:
        token: The compact serialized token. A leading ``Bearer `` is stripped.
        public_key: Optional PEM or JWK used to verify the signature. A
            private key also works since its public half is used.

    Returns:
        DecodedToken with ``verified`` set when a key was checked.

    Raises:
        TokenDecodeError: If the token is malformed or the signature is invalid.
    """
    if not token:
        raise TokenDecodeError("No token provided")

    if token.startswith("Bearer "):
        token = token[len("Bearer "):]

    if token.count(".") != 2:
        raise TokenDecodeError("Invalid token format: expected header.payload.signature")

    try:
        jws_token = jws.JWS()
        jws_token.deserialize(token)

        verified = False
        if public_key is not None:
            jws_token.verify(_load_public_key(public_key))
            verified = True

        payload_bytes = jws_token.objects.get("payload", b"")
        if isinstance(payload_bytes, str):
            payload_bytes = payload_bytes.encode("utf-8")

        claims = json.loads(payload_bytes.decode("utf-8"))
        header = json.loads(jws_token.objects.get("protected", "{}"))
    except (JWException, ValueError, TypeError) as e:
        logger.debug(f"Token decode failed: {e}")
        raise TokenDecodeError(f"Invalid token: {e}") from e

    if not isinstance(claims, dict):
        raise TokenDecodeError("Token payload is not a JSON object")

    return DecodedToken(header=header, claims=claims, verified=verified, raw=token)
