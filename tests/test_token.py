"""
Unit tests for session token issuance and verification.
"""

import base64
import json

import pytest

from ezgest.core.exceptions import ExpiredTokenError, InvalidTokenError
from ezgest.middleware.jwt_middleware import JWTMiddleware, current_time_ms

DAY_MS = 86_400_000

CLAIMS = {"email": "alice@x.com", "nome": "Alice", "cognome": "Rossi", "id": "6875f3afc8337606d54a7f37"}


@pytest.fixture
def jwt():
    return JWTMiddleware(secret_key="unit-test-secret")


def b64decode(segment):
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def replace_char(segment, index):
    replacement = "A" if segment[index] != "A" else "B"
    return segment[:index] + replacement + segment[index + 1:]


def test_round_trip_adds_exp(jwt):
    now = current_time_ms()
    token = jwt.issue_token(CLAIMS, now_ms=now)

    claims = jwt.retrieve_details_from_token(token)
    assert claims == {**CLAIMS, "exp": now + DAY_MS}


def test_token_layout(jwt):
    token = jwt.issue_token(CLAIMS)
    header, payload, signature = token.split(".")

    assert "=" not in token
    assert json.loads(b64decode(header)) == {"alg": "HS256", "typ": "JWT"}
    assert json.loads(b64decode(payload))["email"] == "alice@x.com"
    assert len(b64decode(signature)) == 32


def test_tampered_signature_rejected(jwt):
    header, payload, signature = jwt.issue_token(CLAIMS).split(".")
    forged = ".".join([header, payload, replace_char(signature, 0)])

    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(forged)


def test_tampered_payload_rejected(jwt):
    header, payload, signature = jwt.issue_token(CLAIMS).split(".")
    claims = json.loads(b64decode(payload))
    claims["email"] = "mallory@x.com"
    forged_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")

    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(".".join([header, forged_payload, signature]))


def test_flipped_payload_character_rejected(jwt):
    header, payload, signature = jwt.issue_token(CLAIMS).split(".")
    forged = ".".join([header, replace_char(payload, 5), signature])

    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(forged)


def test_other_secret_rejected(jwt):
    token = JWTMiddleware(secret_key="someone-else").issue_token(CLAIMS)
    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(token)


def test_expired_token_rejected(jwt):
    issued = current_time_ms() - DAY_MS - 1
    token = jwt.issue_token(CLAIMS, now_ms=issued)

    with pytest.raises(ExpiredTokenError):
        jwt.retrieve_details_from_token(token)


def test_token_valid_until_exp(jwt):
    token = jwt.issue_token(CLAIMS, now_ms=1_000)
    assert jwt.retrieve_details_from_token(token, now_ms=1_000 + DAY_MS)["email"] == "alice@x.com"
    with pytest.raises(ExpiredTokenError):
        jwt.retrieve_details_from_token(token, now_ms=1_001 + DAY_MS)


@pytest.mark.parametrize("token", [
    "",
    "abc",
    "a.b",
    "a.b.c.d",
    "a..c",
    ".b.c",
    "a.b.",
    "invalid_token",
])
def test_malformed_token_rejected(jwt, token):
    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(token)


def test_token_without_exp_rejected(jwt):
    from jose import jwt as jose_jwt

    token = jose_jwt.encode(CLAIMS, "unit-test-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        jwt.retrieve_details_from_token(token)
