from .time import utc_now, utc_iso, parse_iso, as_utc, coerce_timestamp

__all__ = [
    "utc_now", "utc_iso", "parse_iso", "as_utc", "coerce_timestamp",
]
