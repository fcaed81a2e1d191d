"""
JWT signing with jwcrypto.

Produces compact JWS serializations (header.payload.signature) from a claims
dictionary and a private key. The signing algorithm follows the key type
unless the header names one explicitly.
"""

import json
from typing import Any, Dict, Union

from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from jwcrypto import jwk, jws
from jwcrypto.common import JWException, json_encode

from jwt_access.errors import SigningError

KeyMaterial = Union[str, bytes, jwk.JWK, PrivateKeyTypes]

_EC_ALGORITHMS = {"P-256": "ES256", "P-384": "ES384", "P-521": "ES512"}


def load_signing_key(key: KeyMaterial) -> jwk.JWK:
    """
    Load private key material into a JWK.

    Args:
        key: PEM text or bytes, a JWK JSON string, a ``jwk.JWK``, or a
            ``cryptography`` private key object.

    Raises:
        SigningError: If the key cannot be loaded or holds no private part.
    """
    if key is None:
        raise SigningError("No signing key provided")

    try:
        if isinstance(key, jwk.JWK):
            loaded = key
        elif isinstance(key, bytes):
            loaded = jwk.JWK.from_pem(key)
        elif isinstance(key, str):
            if key.lstrip().startswith("{"):
                loaded = jwk.JWK.from_json(key)
            else:
                loaded = jwk.JWK.from_pem(key.encode("utf-8"))
        else:
            loaded = jwk.JWK.from_pyca(key)
    except (JWException, ValueError, TypeError) as e:
        raise SigningError(f"Invalid signing key: {e}") from e

    if not loaded.has_private:
        raise SigningError("Signing key has no private component")
    return loaded


def algorithm_for_key(key: jwk.JWK) -> str:
    """Pick the JWS algorithm matching a key's type."""
    kty = key.key_type
    if kty == "RSA":
        return "RS256"
    if kty == "EC":
        alg = _EC_ALGORITHMS.get(key.get("crv"))
        if alg:
            return alg
    if kty == "OKP" and key.get("crv") == "Ed25519":
        return "EdDSA"
    raise SigningError(f"Unsupported signing key type: {kty} {key.get('crv', '')}".rstrip())


def sign(header: Dict[str, Any], claims: Dict[str, Any], key: KeyMaterial) -> str:
    """
    Sign claims and return a compact JWT.

    Args:
        header: Protected header fields (``typ``, optional ``kid``, optional ``alg``).
        claims: JWT claims set.
        key: Private key material accepted by load_signing_key.

    Returns:
        The compact serialized token.

    Raises:
        SigningError: If the key is unusable or signing fails.
    """
    signing_key = load_signing_key(key)

    protected = dict(header)
    protected.setdefault("alg", algorithm_for_key(signing_key))

    try:
        token = jws.JWS(json.dumps(claims, separators=(",", ":")))
        token.add_signature(signing_key, None, json_encode(protected), None)
        return token.serialize(compact=True)
    except (JWException, ValueError, TypeError) as e:
        raise SigningError(f"Failed to sign token: {e}") from e
