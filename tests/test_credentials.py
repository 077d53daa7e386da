"""Password hashing, API key generation and expiry timestamps."""

import hashlib
import re
from datetime import datetime, timedelta, timezone

from keyportal.auth.keys import compute_expiration, format_timestamp, generate_api_key
from keyportal.auth.password import hash_password, verify_password

HEX_64 = re.compile(r"^[0-9a-f]{64}$")


# ═══════════════════════════════════════════════════════════
# Passwords
# ═══════════════════════════════════════════════════════════


def test_hash_password_is_deterministic():
    assert hash_password("hunter2") == hash_password("hunter2")


def test_hash_password_is_sha256_hex():
    digest = hash_password("hunter2")
    assert digest == hashlib.sha256(b"hunter2").hexdigest()
    assert HEX_64.match(digest)


def test_hash_password_differs_per_input():
    assert hash_password("a") != hash_password("b")


def test_hash_password_handles_unicode():
    assert hash_password("pässwörd") == hashlib.sha256("pässwörd".encode()).hexdigest()


def test_verify_password():
    stored = hash_password("correct horse")
    assert verify_password("correct horse", stored)
    assert not verify_password("wrong horse", stored)


# ═══════════════════════════════════════════════════════════
# API keys
# ═══════════════════════════════════════════════════════════


def test_api_key_is_64_hex_chars():
    key = generate_api_key()
    assert HEX_64.match(key)


def test_api_keys_do_not_repeat():
    """Collision smoke test over 10 000 keys."""
    keys = [generate_api_key() for _ in range(10_000)]
    assert len(set(keys)) == len(keys)
    assert all(HEX_64.match(k) for k in keys)


# ═══════════════════════════════════════════════════════════
# Expiry
# ═══════════════════════════════════════════════════════════


def test_compute_expiration_default_is_30_days():
    now = datetime(2026, 1, 31, 12, 0, 0)
    assert compute_expiration(now=now) == datetime(2026, 3, 2, 12, 0, 0)


def test_compute_expiration_custom_days():
    now = datetime(2026, 1, 1, 0, 0, 0)
    assert compute_expiration(7, now=now) == datetime(2026, 1, 8, 0, 0, 0)


def test_compute_expiration_drops_microseconds_and_tz():
    now = datetime(2026, 5, 1, 10, 0, 0, 987654, tzinfo=timezone(timedelta(hours=2)))
    result = compute_expiration(1, now=now)
    assert result == datetime(2026, 5, 2, 8, 0, 0)
    assert result.tzinfo is None


def test_compute_expiration_uses_current_utc_time():
    before = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
    result = compute_expiration()
    after = datetime.now(timezone.utc).replace(tzinfo=None)
    assert before + timedelta(days=30) <= result <= after + timedelta(days=30)


def test_format_timestamp():
    assert format_timestamp(datetime(2026, 3, 2, 9, 5, 7)) == "2026-03-02 09:05:07"
