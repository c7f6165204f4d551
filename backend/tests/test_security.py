"""
DevConnector Backend: Credentials & Token Unit Tests
=====================================================

What:  Tests for password hashing, avatar derivation, token issuance and
       the identity verifier.

What we test:
    ✅ bcrypt round trip; the hash is never the plain password
    ✅ Gravatar URL is derived from the normalized email
    ✅ Issued tokens verify back to the same user id
    ✅ Missing, expired, tampered and claim-less tokens are all rejected
"""

import hashlib
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from devconnector.exceptions import UnauthenticatedError
from devconnector.security import (
    UserIdentity,
    gravatar_url,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")


class TestGravatar:
    def test_normalized_email(self):
        """Case and surrounding whitespace do not change the avatar."""
        digest = hashlib.md5(b"jane@mail.com").hexdigest()
        url = gravatar_url("  Jane@Mail.com ")
        assert url == f"https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


class TestTokens:
    """Tests for issue_token / verify_token."""

    def test_round_trip(self, test_settings):
        token = issue_token("3f1c7a52-0000-4000-8000-000000000001", test_settings)
        identity = verify_token(token, test_settings)
        assert identity == UserIdentity(id="3f1c7a52-0000-4000-8000-000000000001")

    def test_payload_shape(self, test_settings):
        token = issue_token("abc", test_settings)
        payload = jwt.decode(token, test_settings.jwt_secret, algorithms=["HS256"])
        assert payload["user"] == {"id": "abc"}
        assert payload["exp"] - payload["iat"] == test_settings.jwt_expires_in

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, test_settings, token):
        with pytest.raises(UnauthenticatedError) as exc_info:
            verify_token(token, test_settings)
        assert exc_info.value.message == "No token, authorization denied"
        assert exc_info.value.errors == [
            {"msg": "No token, authorization denied", "param": "x-auth-token"}
        ]

    def test_expired_token(self, test_settings):
        """A token issued longer ago than its lifetime is rejected."""
        issued = datetime.now(timezone.utc) - timedelta(seconds=test_settings.jwt_expires_in + 60)
        token = issue_token("abc", test_settings, now=issued)

        with pytest.raises(UnauthenticatedError) as exc_info:
            verify_token(token, test_settings)
        assert exc_info.value.message == "Token is not valid"
        assert exc_info.value.status_code == 401

    def test_wrong_secret(self, test_settings):
        token = jwt.encode({"user": {"id": "abc"}}, "some-other-secret", algorithm="HS256")
        with pytest.raises(UnauthenticatedError) as exc_info:
            verify_token(token, test_settings)
        assert exc_info.value.message == "Token is not valid"

    def test_garbage_token(self, test_settings):
        with pytest.raises(UnauthenticatedError) as exc_info:
            verify_token("not.a.token", test_settings)
        assert exc_info.value.message == "Token is not valid"

    def test_missing_user_claim(self, test_settings):
        token = jwt.encode({"sub": "abc"}, test_settings.jwt_secret, algorithm="HS256")
        with pytest.raises(UnauthenticatedError) as exc_info:
            verify_token(token, test_settings)
        assert exc_info.value.message == "Token is not valid"
        assert exc_info.value.context == {"reason": "missing_claim"}
