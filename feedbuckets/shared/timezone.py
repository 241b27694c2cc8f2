"""User timezone helpers producing the reference instant for a request."""

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from feedbuckets.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "UTC"


def get_zone(tz_name: str | None) -> tzinfo:
    """
    Resolve an IANA timezone name.

    Unknown or empty names fall back to UTC so a bad profile value never
    blocks a request.
    """
    if not tz_name:
        return UTC
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{tz_name}', falling back to {DEFAULT_TIMEZONE}")
        return UTC


def convert(tz_name: str | None, moment: datetime) -> datetime:
    """Express a timestamp in the given timezone (naive input is treated as UTC)"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(get_zone(tz_name))


def now(tz_name: str | None) -> datetime:
    """Current instant localized to the user's timezone"""
    return convert(tz_name, datetime.now(UTC))
