"""
Unit tests for the signing collaborator.
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from jwcrypto import jwk

from jwt_access import SigningError, decode_token, sign
from jwt_access.signing import algorithm_for_key, load_signing_key


CLAIMS = {"iss": "a@b.com", "sub": "a@b.com", "aud": "https://svc.example.com/", "iat": 1, "exp": 2}


class TestLoadSigningKey:
    """Tests for load_signing_key()."""

    def test_pem_string(self, service_account):
        key = load_signing_key(service_account.private_key_pem)
        assert key.key_type == "RSA"
        assert key.has_private

    def test_pem_bytes(self, service_account):
        key = load_signing_key(service_account.private_key_pem.encode())
        assert key.key_type == "RSA"

    def test_jwk_json(self):
        generated = jwk.JWK.generate(kty="OKP", crv="Ed25519")
        key = load_signing_key(generated.export_private())
        assert key.key_type == "OKP"

    def test_jwk_object(self):
        generated = jwk.JWK.generate(kty="EC", crv="P-256")
        assert load_signing_key(generated) is generated

    def test_cryptography_key(self):
        key = load_signing_key(ec.generate_private_key(ec.SECP256R1()))
        assert key.key_type == "EC"

    def test_public_key_rejected(self, service_account):
        """Public-only material cannot sign."""
        with pytest.raises(SigningError, match="private"):
            load_signing_key(service_account.public_key_pem)

    def test_garbage_rejected(self):
        with pytest.raises(SigningError, match="Invalid signing key"):
            load_signing_key("privatekey")

    def test_none_rejected(self):
        with pytest.raises(SigningError):
            load_signing_key(None)


class TestAlgorithmForKey:
    """Tests for algorithm_for_key()."""

    def test_rsa(self, service_account):
        assert algorithm_for_key(load_signing_key(service_account.private_key_pem)) == "RS256"

    def test_ec_p256(self):
        assert algorithm_for_key(jwk.JWK.generate(kty="EC", crv="P-256")) == "ES256"

    def test_ec_p384(self):
        assert algorithm_for_key(jwk.JWK.generate(kty="EC", crv="P-384")) == "ES384"

    def test_ed25519(self):
        assert algorithm_for_key(jwk.JWK.generate(kty="OKP", crv="Ed25519")) == "EdDSA"

    def test_symmetric_unsupported(self):
        with pytest.raises(SigningError, match="Unsupported"):
            algorithm_for_key(jwk.JWK.generate(kty="oct", size=256))


class TestSign:
    """Tests for sign()."""

    def test_compact_serialization(self, service_account):
        token = sign({"typ": "JWT"}, CLAIMS, service_account.private_key_pem)
        assert len(token.split(".")) == 3

    def test_verifies_with_public_key(self, service_account):
        token = sign({"typ": "JWT", "kid": "k1"}, CLAIMS, service_account.private_key_pem)
        decoded = decode_token(token, public_key=service_account.public_key_pem)

        assert decoded.verified is True
        assert decoded.claims == CLAIMS
        assert decoded.header == {"typ": "JWT", "kid": "k1", "alg": "RS256"}

    def test_explicit_alg_wins(self, service_account):
        token = sign({"alg": "RS512"}, CLAIMS, service_account.private_key_pem)
        assert decode_token(token).header["alg"] == "RS512"

    def test_ed25519_key(self):
        private = ed25519.Ed25519PrivateKey.generate()
        token = sign({"typ": "JWT"}, CLAIMS, private)

        decoded = decode_token(token, public_key=jwk.JWK.from_pyca(private.public_key()))
        assert decoded.header["alg"] == "EdDSA"
        assert decoded.verified is True
