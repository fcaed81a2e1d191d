"""
Service account key generation.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jwcrypto import jwk

from jwt_access.config import DEFAULT_KEY_SIZE


@dataclass
class ServiceAccountKey:
    """A freshly generated service account identity."""

    client_email: str
    private_key_pem: str
    public_key_pem: str
    private_key_id: Optional[str] = None

    def to_credentials(self) -> Dict[str, Any]:
        """Return the service account JSON object for this key."""
        credentials = {
            "type": "service_account",
            "client_email": self.client_email,
            "private_key": self.private_key_pem,
        }
        if self.private_key_id:
            credentials["private_key_id"] = self.private_key_id
        return credentials

    def to_json(self) -> str:
        return json.dumps(self.to_credentials(), indent=2)


def generate_service_account(
    email: str, key_size: int = DEFAULT_KEY_SIZE, key_id: Optional[str] = None
) -> ServiceAccountKey:
    """
    Generate an RSA key pair for a service account.

    Args:
        email: Service account email.
        key_size: RSA modulus size in bits.
        key_id: Optional key identifier. Defaults to the key's JWK thumbprint.
    """
    key = jwk.JWK.generate(kty="RSA", size=key_size)

    return ServiceAccountKey(
        client_email=email,
        private_key_pem=key.export_to_pem(private_key=True, password=None).decode("utf-8"),
        public_key_pem=key.export_to_pem().decode("utf-8"),
        private_key_id=key_id or key.thumbprint(),
    )
