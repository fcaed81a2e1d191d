"""
Unit tests for token decoding.
"""

import pytest
from jwcrypto import jwk

from jwt_access import TokenDecodeError, decode_token, sign


CLAIMS = {"iss": "a@b.com", "sub": "a@b.com", "aud": "https://svc.example.com/", "iat": 1, "exp": 2}


@pytest.fixture
def token(service_account) -> str:
    return sign({"typ": "JWT"}, CLAIMS, service_account.private_key_pem)


class TestDecodeToken:
    """Tests for decode_token()."""

    def test_without_key(self, token):
        """Claims are readable without verification."""
        decoded = decode_token(token)
        assert decoded.verified is False
        assert decoded.iss == "a@b.com"
        assert decoded.aud == "https://svc.example.com/"
        assert decoded.exp == 2

    def test_bearer_prefix_stripped(self, token):
        assert decode_token(f"Bearer {token}").sub == "a@b.com"

    def test_verified_with_pem(self, token, service_account):
        assert decode_token(token, public_key=service_account.public_key_pem).verified is True

    def test_wrong_key(self, token):
        other = jwk.JWK.generate(kty="RSA", size=2048)
        with pytest.raises(TokenDecodeError):
            decode_token(token, public_key=other.export_public())

    def test_tampered_payload(self, token, service_account):
        header, _, signature = token.split(".")
        forged = sign({"typ": "JWT"}, {**CLAIMS, "aud": "evil"}, jwk.JWK.generate(kty="RSA", size=2048))
        tampered = ".".join([header, forged.split(".")[1], signature])

        with pytest.raises(TokenDecodeError):
            decode_token(tampered, public_key=service_account.public_key_pem)

    def test_malformed(self):
        with pytest.raises(TokenDecodeError, match="format"):
            decode_token("not-a-token")

    def test_bad_segments(self):
        with pytest.raises(TokenDecodeError):
            decode_token("a.b.c")

    def test_empty(self):
        with pytest.raises(TokenDecodeError):
            decode_token("")
