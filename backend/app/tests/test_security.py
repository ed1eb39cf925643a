"""
Tests for signed session and OAuth state tokens.
"""
from datetime import timedelta

from app.core.security import (
    create_session_token,
    decode_session_token,
    create_state_token,
    verify_state_token,
    generate_token,
)


def test_session_token_round_trip():
    token = create_session_token("abc123")
    assert decode_session_token(token) == "abc123"


def test_expired_session_token():
    token = create_session_token("abc123", expires_delta=timedelta(seconds=-1))
    assert decode_session_token(token) is None


def test_tampered_session_token():
    token = create_session_token("abc123")
    assert decode_session_token(token[:-2] + "xx") is None
    assert decode_session_token("garbage") is None


def test_state_token_verification():
    state = generate_token(16)
    token = create_state_token(state)
    assert verify_state_token(token, state)
    assert not verify_state_token(token, "other")
    assert not verify_state_token(None, state)
    assert not verify_state_token(token, None)


def test_state_token_is_not_a_session_token():
    """A state cookie must not be accepted as a session cookie."""
    token = create_state_token("some-state")
    assert decode_session_token(token) is None


def test_expired_session_token_readable_without_exp_check():
    """Logout needs the session id even after the cookie has expired."""
    token = create_session_token("abc123", expires_delta=timedelta(seconds=-1))
    assert decode_session_token(token, verify_exp=False) == "abc123"
    assert decode_session_token("garbage", verify_exp=False) is None
