"""
Tests for token issuance and validation.
"""

import time
import uuid

import pytest
from jose import jwt

from auth.jwt import ALGORITHM, TokenIssuer, TokenValidator
from tests.helpers import TEST_SECRET, make_settings
from utils.errors import AuthError, ConfigurationError


class TestTokenIssuer:
    def test_claims(self, issuer, validator):
        user_id = uuid.uuid4()
        token = issuer.issue(user_id, "ada@example.com", "Ada")
        claims = validator.validate(token)

        assert claims["sub"] == str(user_id)
        assert claims["email"] == "ada@example.com"
        assert claims["name"] == "Ada"
        assert claims["iss"] == "taskmanager-tests"
        assert claims["aud"] == "taskmanager-clients"
        assert claims["exp"] - claims["iat"] == 60 * 60
        uuid.UUID(claims["jti"])

    def test_each_token_has_unique_id(self, issuer, validator):
        user_id = uuid.uuid4()
        a = validator.validate(issuer.issue(user_id, "a@example.com", "A"))
        b = validator.validate(issuer.issue(user_id, "a@example.com", "A"))
        assert a["jti"] != b["jti"]

    def test_signed_with_hs256(self, issuer):
        token = issuer.issue(uuid.uuid4(), "a@example.com", "A")
        assert jwt.get_unverified_header(token)["alg"] == ALGORITHM

    def test_custom_expiry(self, validator):
        issuer = TokenIssuer(make_settings(jwt_expiry_minutes=5))
        claims = validator.validate(issuer.issue(uuid.uuid4(), "a@example.com", "A"))
        assert claims["exp"] - claims["iat"] == 300

    def test_no_issuer_or_audience_when_unset(self):
        settings = make_settings(jwt_issuer=None, jwt_audience=None)
        token = TokenIssuer(settings).issue(uuid.uuid4(), "a@example.com", "A")
        claims = TokenValidator(settings).validate(token)
        assert "iss" not in claims
        assert "aud" not in claims

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_missing_key_is_configuration_error(self, secret):
        with pytest.raises(ConfigurationError, match="jwt_secret"):
            TokenIssuer(make_settings(jwt_secret=secret))
        with pytest.raises(ConfigurationError):
            TokenValidator(make_settings(jwt_secret=secret))


class TestTokenValidator:
    def test_zero_ttl_token_is_expired(self, validator):
        issuer = TokenIssuer(make_settings(jwt_expiry_minutes=0))
        token = issuer.issue(
            uuid.uuid4(), "a@example.com", "A", issued_at=int(time.time()) - 5,
        )
        with pytest.raises(AuthError, match="Invalid or expired token"):
            validator.validate(token)

    def test_wrong_key_rejected(self, validator):
        other = TokenIssuer(make_settings(jwt_secret="a-different-signing-key"))
        token = other.issue(uuid.uuid4(), "a@example.com", "A")
        with pytest.raises(AuthError):
            validator.validate(token)

    def test_wrong_audience_rejected(self, validator):
        other = TokenIssuer(make_settings(jwt_audience="someone-else"))
        with pytest.raises(AuthError):
            validator.validate(other.issue(uuid.uuid4(), "a@example.com", "A"))

    def test_wrong_issuer_rejected(self, validator):
        other = TokenIssuer(make_settings(jwt_issuer="rogue"))
        with pytest.raises(AuthError):
            validator.validate(other.issue(uuid.uuid4(), "a@example.com", "A"))

    def test_tampered_token_rejected(self, issuer, validator):
        token = issuer.issue(uuid.uuid4(), "a@example.com", "A")
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": int(time.time()) + 60},
            "guess",
            algorithm=ALGORITHM,
        ).split(".")[1]
        with pytest.raises(AuthError):
            validator.validate(f"{header}.{forged}.{signature}")

    def test_garbage_rejected(self, validator):
        with pytest.raises(AuthError):
            validator.validate("not.a.jwt")

    def test_validates_token_signed_with_same_key(self, validator):
        token = jwt.encode(
            {
                "sub": "x",
                "iss": "taskmanager-tests",
                "aud": "taskmanager-clients",
                "exp": int(time.time()) + 60,
            },
            TEST_SECRET,
            algorithm=ALGORITHM,
        )
        assert validator.validate(token)["sub"] == "x"
