"""Test password hashing and access tokens."""

import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.security import create_access_token, decode_token, get_password_hash, verify_password


def test_password_hashing():
    hashed = get_password_hash("s3cret-pass")
    
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_round_trip():
    token = create_access_token("mensah@example.com", organization_id="org-1")
    payload = decode_token(token)
    
    assert payload["sub"] == "mensah@example.com"
    assert payload["org"] == "org-1"
    assert "exp" in payload


def test_expired_or_tampered_token():
    expired = create_access_token("mensah@example.com", expires_delta=timedelta(minutes=-5))
    assert decode_token(expired) is None
    assert decode_token("not-a-token") is None
