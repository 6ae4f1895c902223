import time
from datetime import timedelta

import pytest
from jose import jwt

from eco_electric.tokens import ExpiredTokenError, Identity, InvalidTokenError, TokenService


def test_issue_then_verify_returns_same_email(token_service):
    token = token_service.issue("alice@example.com")

    assert token_service.verify(token) == Identity(email="alice@example.com")


def test_expired_token_is_rejected(token_service):
    token = token_service.issue("alice@example.com", expires_in=timedelta(seconds=-5))

    with pytest.raises(ExpiredTokenError):
        token_service.verify(token)


def test_token_signed_with_other_secret_is_invalid(token_service):
    token = TokenService("another-secret").issue("alice@example.com")

    with pytest.raises(InvalidTokenError) as excinfo:
        token_service.verify(token)
    assert not isinstance(excinfo.value, ExpiredTokenError)


def test_malformed_token_is_invalid(token_service):
    with pytest.raises(InvalidTokenError):
        token_service.verify("not-a-jwt")


def test_token_without_email_claim_is_invalid(token_service):
    token = jwt.encode({"sub": "alice"}, "test-secret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_token_carries_expiry_one_hour_out(token_service):
    token = token_service.issue("alice@example.com")
    claims = jwt.get_unverified_claims(token)

    assert claims["email"] == "alice@example.com"
    assert 3590 <= claims["exp"] - time.time() <= 3600


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(RuntimeError):
        TokenService("")
