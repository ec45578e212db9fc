"""
Tests for the identity token codec.

Covers round trips, expiry against an injected clock, and the three
distinguishable rejection reasons.
"""

from datetime import timedelta

import jwt
import pytest

from league.errors import TokenExpired, TokenMalformed, TokenSignatureInvalid, Unauthenticated
from league.tokens import TokenCodec


@pytest.fixture
def codec(clock):
    return TokenCodec('unit-test-secret', timedelta(hours=1), clock=clock)


class TestIssueAndVerify:
    """Tokens verify back to the subject they were issued for."""

    @pytest.mark.parametrize('subject_id', [1, 42, 987654])
    def test_round_trip(self, codec, subject_id):
        issued = codec.issue(subject_id)
        result = codec.verify(issued.token)
        assert result.ok
        assert result.value == subject_id

    def test_expiry_is_issue_time_plus_window(self, codec, clock):
        issued = codec.issue(7)
        assert issued.expires_at == clock.now() + timedelta(hours=1)
        assert issued.to_dict()['token_expiry'] == issued.expires_at.isoformat()

    def test_still_valid_just_before_expiry(self, codec, clock):
        issued = codec.issue(7)
        clock.advance(minutes=59, seconds=59)
        assert codec.verify(issued.token).ok

    def test_empty_secret_rejected(self, clock):
        with pytest.raises(ValueError):
            TokenCodec('', timedelta(hours=1), clock=clock)


class TestRejections:
    """Each failure mode maps to its own Unauthenticated subclass."""

    def test_expired_token(self, codec, clock):
        issued = codec.issue(7)
        clock.advance(hours=1)
        result = codec.verify(issued.token)
        assert not result.ok
        assert isinstance(result.error, TokenExpired)
        assert result.error.reason == 'token_expired'

    def test_expired_even_with_valid_signature(self, codec, clock):
        issued = codec.issue(7)
        clock.advance(days=30)
        assert isinstance(codec.verify(issued.token).error, TokenExpired)

    def test_token_signed_with_other_secret(self, clock):
        other = TokenCodec('some-other-secret', timedelta(hours=1), clock=clock)
        ours = TokenCodec('unit-test-secret', timedelta(hours=1), clock=clock)
        result = ours.verify(other.issue(7).token)
        assert isinstance(result.error, TokenSignatureInvalid)

    def test_tampered_payload(self, codec):
        header, _, signature = codec.issue(7).token.split('.')
        forged = jwt.encode({'sub': '8', 'iat': 0, 'exp': 9999999999}, 'x', algorithm='HS256')
        _, forged_payload, _ = forged.split('.')
        result = codec.verify(f'{header}.{forged_payload}.{signature}')
        assert isinstance(result.error, TokenSignatureInvalid)

    @pytest.mark.parametrize('token', ['', 'not-a-token', 'a.b.c', None])
    def test_garbage_is_malformed(self, codec, token):
        result = codec.verify(token)
        assert isinstance(result.error, TokenMalformed)

    def test_missing_expiry_claim(self, codec):
        token = jwt.encode({'sub': '7', 'iat': 1}, 'unit-test-secret', algorithm='HS256')
        assert isinstance(codec.verify(token).error, TokenMalformed)

    def test_non_numeric_subject(self, codec, clock):
        exp = int((clock.now() + timedelta(hours=1)).timestamp())
        token = jwt.encode(
            {'sub': 'admin', 'iat': 1, 'exp': exp}, 'unit-test-secret', algorithm='HS256'
        )
        assert isinstance(codec.verify(token).error, TokenMalformed)

    def test_all_failures_are_unauthenticated(self, codec):
        result = codec.verify('nope')
        assert isinstance(result.error, Unauthenticated)
        assert result.error.status_code == 401
        assert result.code == 'unauthenticated'
