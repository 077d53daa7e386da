"""API key generation and expiry timestamps."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

API_KEY_BYTES = 32  # 64 hex chars
DEFAULT_EXPIRE_DAYS = 30
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def generate_api_key() -> str:
    """Random hex token from the OS CSPRNG."""
    return secrets.token_hex(API_KEY_BYTES)


def compute_expiration(
    days: int = DEFAULT_EXPIRE_DAYS, now: Optional[datetime] = None
) -> datetime:
    """Current UTC time plus `days`, as a naive datetime with second precision.

    Naive UTC matches the DATETIME columns; `now` is injectable for tests.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=0) + timedelta(days=days)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as 'YYYY-MM-DD HH:MM:SS'."""
    return value.strftime(TIMESTAMP_FORMAT)
